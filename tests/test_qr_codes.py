import io
import re

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from main import app
from qrlink_app.config import settings
from qrlink_app.dependencies import get_image_store
from qrlink_app.errors import EncodeError, ImageIOError, NotFoundError, StorageError
from qrlink_app.services.qr_service import QRCodeService
from qrlink_app.storage.factory import QRRecordStoreFactory, QRRecordBackend
from qrlink_app.storage.images import ImageStore
from qrlink_app.storage.strategies import NullQRRecordStore, QRRecordStore, SQLQRRecordStore

IMAGE_URL_RE = re.compile(r'href="http://testserver/qrcodes/([0-9a-f-]{36})\.png"')
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class FailingRecordStore(QRRecordStore):
    """Record store whose inserts always fail"""

    def create(self, qr_id, long_url, ip, user_agent=None):
        raise StorageError("insert failed")

    def get(self, qr_id):
        raise NotFoundError(qr_id)


class TestImageStore:
    """Test QR encoding and file handling"""

    def test_encode_and_store_writes_256px_png(self, image_store: ImageStore):
        path = image_store.encode_and_store("https://www.example.com/", "abc")

        assert path == image_store.content_dir / "abc.png"
        content = path.read_bytes()
        assert content.startswith(PNG_SIGNATURE)
        with Image.open(io.BytesIO(content)) as image:
            assert image.size == (256, 256)

    def test_read_image(self, image_store: ImageStore):
        image_store.encode_and_store("https://www.example.com/", "abc")
        assert image_store.read_image("abc").startswith(PNG_SIGNATURE)

    def test_read_missing_image(self, image_store: ImageStore):
        with pytest.raises(NotFoundError):
            image_store.read_image("missing")

    @pytest.mark.parametrize("qr_id", ["", ".", "..", "../escape", "a/b"])
    def test_rejects_unsafe_ids(self, image_store: ImageStore, qr_id):
        with pytest.raises(NotFoundError):
            image_store.path_for(qr_id)

    def test_oversized_data_is_encode_error(self, image_store: ImageStore):
        with pytest.raises(EncodeError):
            image_store.encode_and_store("https://example.com/" + "a" * 5000, "too-long")
        assert not (image_store.content_dir / "too-long.png").exists()

    def test_delete_missing_image_is_ignored(self, image_store: ImageStore):
        image_store.delete_image("never-written")

    def test_unwritable_content_dir_is_io_error(self, tmp_path):
        blocker = tmp_path / "not-a-directory"
        blocker.write_text("")
        store = ImageStore(blocker, image_size=256)

        with pytest.raises(ImageIOError):
            store.encode_and_store("https://www.example.com/", "abc")


class TestQRCodeService:
    """Test QR orchestration directly"""

    def test_round_trip(self, db_session, image_store):
        service = QRCodeService(SQLQRRecordStore(db_session), image_store)

        qr_id = service.create_qr_code("https://www.example.com/qr", ip="127.0.0.1", user_agent="ua")

        record = service.qr_record_for(qr_id)
        assert record.long_url == "https://www.example.com/qr"
        assert record.ip == "127.0.0.1"
        assert record.user_agent == "ua"
        assert service.read_image(qr_id).startswith(PNG_SIGNATURE)

    def test_failed_record_insert_removes_image(self, image_store):
        service = QRCodeService(FailingRecordStore(), image_store)

        with pytest.raises(StorageError):
            service.create_qr_code("https://www.example.com/", ip="127.0.0.1")

        assert list(image_store.content_dir.glob("*.png")) == []

    def test_unknown_record(self, db_session, image_store):
        service = QRCodeService(SQLQRRecordStore(db_session), image_store)

        with pytest.raises(NotFoundError):
            service.qr_record_for("00000000-0000-4000-8000-000000000000")

    def test_null_store_keeps_image_only(self, image_store):
        service = QRCodeService(NullQRRecordStore(), image_store)

        qr_id = service.create_qr_code("https://www.example.com/", ip="127.0.0.1")

        assert service.read_image(qr_id).startswith(PNG_SIGNATURE)
        with pytest.raises(NotFoundError):
            service.qr_record_for(qr_id)


class TestQRRecordStoreFactory:

    def test_default_backend_is_sql(self, db_session):
        assert isinstance(QRRecordStoreFactory.create(db_session), SQLQRRecordStore)

    def test_none_backend(self, db_session):
        store = QRRecordStoreFactory.create(db_session, QRRecordBackend.NONE)
        assert isinstance(store, NullQRRecordStore)


class TestQRCodeWeb:
    """Test the HTML form flow and image endpoint"""

    def create_qr(self, client: TestClient, long_url: str) -> str:
        response = client.post("/create", data={"long_url": long_url, "source": "qr"})
        assert response.status_code == 200
        match = IMAGE_URL_RE.search(response.text)
        assert match, response.text
        return match.group(1)

    def test_create_and_fetch_image(self, client: TestClient):
        qr_id = self.create_qr(client, "https://www.example.com/")

        response = client.get(f"/qrcodes/{qr_id}.png")
        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.content.startswith(PNG_SIGNATURE)

    def test_snippet_embeds_image(self, client: TestClient):
        response = client.post("/create", data={"long_url": "https://www.example.com/", "source": "qr"})
        assert '<img src="http://testserver/qrcodes/' in response.text

    def test_unknown_image(self, client: TestClient):
        response = client.get("/qrcodes/00000000-0000-4000-8000-000000000000.png")
        assert response.status_code == 404

    def test_qr_without_long_url(self, client: TestClient):
        response = client.post("/create", data={"long_url": "", "source": "qr"})
        assert response.status_code == 400

    def test_encode_failure_is_500(self, client: TestClient, image_store):
        response = client.post("/create", data={"long_url": "https://example.com/" + "a" * 5000, "source": "qr"})
        assert response.status_code == 500
        assert response.text == "Failed to create qr code"
        assert list(image_store.content_dir.glob("*.png")) == []

    def test_write_failure_is_500(self, client: TestClient, tmp_path):
        blocker = tmp_path / "not-a-directory"
        blocker.write_text("")
        app.dependency_overrides[get_image_store] = lambda: ImageStore(blocker, image_size=256)

        response = client.post("/create", data={"long_url": "https://www.example.com/", "source": "qr"})

        assert response.status_code == 500
        assert response.text == "Failed to access qr code image"

    def test_file_only_backend(self, client: TestClient, monkeypatch):
        monkeypatch.setattr(settings, "qr_record_backend", "none")

        qr_id = self.create_qr(client, "https://www.example.com/")

        assert client.get(f"/qrcodes/{qr_id}.png").status_code == 200
        assert client.get(f"/api/v1/qrcodes/{qr_id}").status_code == 404


class TestQRCodeAPI:
    """Test the JSON API for QR codes"""

    def test_create_and_get(self, client: TestClient):
        response = client.post("/api/v1/qrcodes", json={"long_url": "https://www.example.com/"})
        assert response.status_code == 201
        data = response.json()
        assert data["image_url"] == f"http://testserver/qrcodes/{data['qr_id']}.png"

        info = client.get(f"/api/v1/qrcodes/{data['qr_id']}")
        assert info.status_code == 200
        assert info.json()["long_url"] == "https://www.example.com/"

    def test_get_unknown(self, client: TestClient):
        response = client.get("/api/v1/qrcodes/unknown")
        assert response.status_code == 404

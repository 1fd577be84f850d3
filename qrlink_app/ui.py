from html import escape

from fastapi.responses import HTMLResponse

INDEX_HTML = """
<!doctype html>
<html>
<head>
  <meta charset="utf-8"/>
  <title>QR Link</title>
  <style>
    body {
      font-family: system-ui, -apple-system, BlinkMacSystemFont, sans-serif;
      margin: 40px auto;
      max-width: 720px;
      background: #fafafa;
    }
    .card {
      background: #fff;
      padding: 20px;
      border-radius: 10px;
      box-shadow: 0 6px 20px rgba(0,0,0,0.06);
    }
    input[type=url], button { padding: 10px; font-size: 14px; }
    input[type=url] { width: 100%; margin-bottom: 10px; box-sizing: border-box; }
    .small { font-size: 13px; color: #555; }
  </style>
</head>
<body>
  <h1>QR Link</h1>
  <p class="small">Shorten a long URL or turn it into a QR code.</p>
  <div class="card">
    <form method="post" action="/create">
      <input type="url" name="long_url" placeholder="https://example.com/some/long/path" required/>
      <label><input type="checkbox" name="source" value="qr"/> Generate a QR code instead</label>
      <p><button type="submit">Create</button></p>
    </form>
  </div>
</body>
</html>
"""


def index_page() -> HTMLResponse:
    return HTMLResponse(content=INDEX_HTML)


def short_link_snippet(short_url: str, long_url: str) -> HTMLResponse:
    """Snippet shown after a short link is created"""
    return HTMLResponse(
        content=(
            '<div class="result">'
            f'<p>Short URL: <a href="{escape(short_url)}">{escape(short_url)}</a></p>'
            f'<p class="small">Redirects to {escape(long_url)}</p>'
            "</div>"
        )
    )


def qr_code_snippet(image_url: str, long_url: str) -> HTMLResponse:
    """Snippet shown after a QR code is created"""
    return HTMLResponse(
        content=(
            '<div class="result">'
            f'<p>QR code: <a href="{escape(image_url)}">{escape(image_url)}</a></p>'
            f'<img src="{escape(image_url)}" alt="QR code for {escape(long_url)}" width="256" height="256"/>'
            "</div>"
        )
    )

#!/usr/bin/env python3
"""
Flask web app: flatten a GitHub repository into a single HTML page.
"""

import html
import logging
import re

from flask import Flask, Response, request

from .config import Settings
from .errors import FlattenError, InvalidReference, RetrievalError
from .pipeline import flatten_repo

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["SETTINGS"] = Settings.from_env()

INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Repo Flattener</title>
  <style>
    body {
      background: #0d1117; color: #c9d1d9;
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Helvetica, Arial, sans-serif;
      margin: 0; display: flex; justify-content: center; align-items: center; min-height: 100vh;
    }
    .container { max-width: 600px; width: 100%; text-align: center; padding: 2rem; }
    h1 { font-size: 2.5rem; margin-bottom: 1.5rem; color: #e6edf3; }
    form { display: flex; flex-direction: column; gap: 1rem; }
    input {
      padding: 0.75rem; font-size: 1rem; background: #161b22; color: #c9d1d9;
      border: 1px solid #30363d; border-radius: 8px; outline: none;
    }
    input:focus { border-color: #79b8ff; }
    button {
      padding: 0.75rem 1.5rem; font-size: 1rem; background: #1f6feb; color: #fff;
      border: none; border-radius: 8px; cursor: pointer;
    }
    .hint { color: #8b949e; margin-top: 2rem; }
    code { background: #161b22; padding: 2px 6px; border-radius: 4px; }
  </style>
</head>
<body>
  <div class="container">
    <h1>Flatten GitHub Repo</h1>
    <form action="/flatten" method="post">
      <input type="text" name="repo_url" placeholder="Enter GitHub Repo URL (e.g., https://github.com/owner/repo)" required>
      <button type="submit">Flatten Repo</button>
    </form>
    <p class="hint">Direct URL: <code>{host}github.com/owner/repo</code></p>
  </div>
</body>
</html>
"""


def error_page(message: str, status: int):
    body = f"""
    <html>
    <body style="font-family: sans-serif; padding: 40px; background: #0d1117; color: #c9d1d9;">
        <h1 style="color: #f85149;">Error</h1>
        <p>Error processing repo: {html.escape(message)}</p>
        <a href="/" style="color: #58a6ff;">← Back to home</a>
    </body>
    </html>
    """
    return body, status


def handle(repo_url: str, as_text: bool = False):
    settings = app.config["SETTINGS"]
    try:
        result = flatten_repo(repo_url, settings)
    except InvalidReference as e:
        return Response(f"Invalid GitHub repo URL: {e.reference}", status=400, mimetype="text/plain")
    except RetrievalError as e:
        logger.error("Retrieval failed for %s: %s", repo_url, e)
        return error_page(str(e), 502)
    except FlattenError as e:
        logger.error("Flattening %s failed: %s", repo_url, e)
        return error_page(str(e), 500)

    if as_text:
        return Response(result.cxml_text, mimetype="text/plain")
    return result.to_html()


@app.route("/")
def index():
    return INDEX_HTML.replace("{host}", html.escape(request.host_url))


@app.route("/flatten", methods=["POST"])
def flatten():
    repo_url = request.form.get("repo_url")
    if not repo_url:
        payload = request.get_json(silent=True)
        repo_url = payload.get("repo_url", "") if isinstance(payload, dict) else ""
    return handle(repo_url, request.args.get("format") == "text")


@app.route("/<path:repo_path>")
def render_repo(repo_path):
    """Direct form: /github.com/owner/repo"""
    # Browsers and proxies collapse "https://" in a path to "https:/"
    repo_path = re.sub(r"^(https?):/+", r"\1://", repo_path)
    return handle(repo_path, request.args.get("format") == "text")


def main() -> None:
    settings = app.config["SETTINGS"]
    logging.basicConfig(level=settings.log_level)
    app.run(host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()

"""
Single-page HTML output holding the human view and the CXML view.
"""

from __future__ import annotations

import html
from typing import List

from .human_view import HumanDocument, SkippedEntry
from .render import Renderer


def render_skip_list(title: str, items: List[SkippedEntry]) -> str:
    if not items:
        return ""
    lis = [
        f"<li><code>{html.escape(i.relative_path)}</code> "
        f"<span class='muted'>({i.size_label})</span></li>"
        for i in items
    ]
    return (
        f"<details open><summary>{html.escape(title)} ({len(items)})</summary>"
        f"<ul class='skip-list'>\n" + "\n".join(lis) + "\n</ul></details>"
    )


def build_html(repo_url: str, doc: HumanDocument, cxml_text: str, renderer: Renderer | None = None) -> str:
    renderer = renderer or Renderer()
    pygments_css = renderer.stylesheet()

    toc_html = "".join(
        f'<li><a href="#file-{t.anchor}">{html.escape(t.relative_path)}</a> '
        f'<span class="muted">({t.size_label})</span></li>'
        for t in doc.toc
    )

    sections: List[str] = []
    for s in doc.sections:
        sections.append(f"""
<section class="file-section" id="file-{s.anchor}">
  <h2>{html.escape(s.relative_path)} <span class="muted">({s.size_label})</span></h2>
  <div class="file-body">{s.body_html}</div>
  <div class="back-top"><a href="#top">↑ Back to top</a></div>
</section>
""")

    skipped_html = (
        render_skip_list("Skipped binaries", doc.skipped_binary) +
        render_skip_list("Skipped large files", doc.skipped_too_large)
    ) or "<p class='muted'>Nothing skipped.</p>"

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width, initial-scale=1" />
<title>Flattened repo – {html.escape(repo_url)}</title>
<style>
  body {{
    font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Helvetica, Arial, sans-serif;
    margin: 0; padding: 0; line-height: 1.45; background: #0d1117; color: #c9d1d9;
  }}
  a {{ color: #79b8ff; }}
  .container {{ max-width: 1100px; margin: 0 auto; padding: 0 1rem; }}
  .muted {{ color: #8b949e; font-weight: normal; font-size: 0.9em; }}
  .page {{ display: grid; grid-template-columns: 320px minmax(0,1fr); gap: 0; }}
  #sidebar {{
    position: sticky; top: 0; align-self: start;
    height: 100vh; overflow: auto;
    border-right: 1px solid #30363d; background: #0d1117;
  }}
  #sidebar .sidebar-inner {{ padding: 0.75rem; }}
  #sidebar h2 {{ margin: 0 0 0.5rem 0; font-size: 1rem; }}
  .toc {{ list-style: none; padding-left: 0; margin: 0; }}
  .toc li {{ padding: 0.15rem 0; white-space: nowrap; }}
  .toc a {{ text-decoration: none; font-weight: 500; }}
  .toc a:hover {{ text-decoration: underline; }}
  main.container {{ padding-top: 1rem; }}
  pre {{ background: #161b22; padding: 0.75rem; overflow: auto; border-radius: 6px; }}
  code {{ font-family: ui-monospace, SFMono-Regular, Menlo, Monaco, Consolas, monospace; }}
  .highlight {{ background: #f6f8fa; color: #24292f; border-radius: 6px; }}
  .highlight pre {{ background: transparent; }}
  .file-section {{ padding: 1rem; border-top: 1px solid #30363d; }}
  .file-section h2 {{ margin: 0 0 0.5rem 0; font-size: 1.1rem; }}
  .file-body {{ margin-bottom: 0.5rem; }}
  .back-top {{ font-size: 0.9rem; }}
  .skip-list code {{ background: #161b22; padding: 0.1rem 0.3rem; border-radius: 4px; }}
  .error {{ color: #ff7b72; background: #2e0b0b; font-weight: 500; }}
  .toc-top {{ display: block; }}
  @media (min-width: 1000px) {{ .toc-top {{ display: none; }} }}
  :target {{ scroll-margin-top: 8px; }}
  .view-toggle {{ margin: 1rem 0; display: flex; gap: 0.5rem; align-items: center; }}
  .toggle-btn {{
    padding: 0.5rem 1rem; background: #161b22; color: #c9d1d9;
    border: 1px solid #30363d; border-radius: 6px; cursor: pointer;
  }}
  .toggle-btn.active {{ border-color: #79b8ff; background: rgba(121, 184, 255, 0.1); }}
  #llm-view {{ display: none; }}
  #llm-text {{
    width: 100%; height: 70vh; box-sizing: border-box;
    font-family: ui-monospace, SFMono-Regular, Menlo, Monaco, Consolas, monospace;
    font-size: 0.85em; border: 1px solid #30363d; border-radius: 6px;
    padding: 1rem; resize: vertical; background: #161b22; color: #c9d1d9;
  }}
  .copy-hint {{ margin-top: 0.5rem; color: #8b949e; font-size: 0.9em; }}

  /* Pygments */
  {pygments_css}
</style>
</head>
<body>
<a id="top"></a>
<div class="page">
  <nav id="sidebar"><div class="sidebar-inner">
      <h2>Contents ({doc.rendered_count})</h2>
      <ul class="toc toc-sidebar">
        <li><a href="#top">↑ Back to top</a></li>
        {toc_html}
      </ul>
  </div></nav>

  <main class="container">
    <section>
      <div class="meta">
        <div><strong>Repository:</strong> <a href="{html.escape(repo_url)}">{html.escape(repo_url)}</a></div>
        <div class="counts">
          <strong>Total files:</strong> {doc.total_files} · <strong>Rendered:</strong> {doc.rendered_count} · <strong>Skipped:</strong> {doc.skipped_count}
        </div>
      </div>
    </section>

    <div class="view-toggle">
      <strong>View:</strong>
      <button class="toggle-btn active" onclick="showHumanView(this)">Human</button>
      <button class="toggle-btn" onclick="showLLMView(this)">LLM</button>
    </div>

    <div id="human-view">
      <section>
        <h2>Directory tree</h2>
        <pre>{html.escape(doc.tree_text)}</pre>
      </section>

      <section class="toc-top">
        <h2>Table of contents ({doc.rendered_count})</h2>
        <ul class="toc">{toc_html}</ul>
      </section>

      <section>
        <h2>Skipped items</h2>
        {skipped_html}
      </section>

      {''.join(sections)}
    </div>

    <div id="llm-view">
      <section>
        <h2>LLM view - CXML format</h2>
        <p>Copy the text below and paste it to an LLM for analysis:</p>
        <textarea id="llm-text" readonly>{html.escape(cxml_text)}</textarea>
        <div class="copy-hint">
          <strong>Tip:</strong> Click in the text area and press Ctrl+A (Cmd+A on Mac) to select all, then Ctrl+C (Cmd+C) to copy.
        </div>
      </section>
    </div>
  </main>
</div>

<script>
function setActive(btn) {{
  document.querySelectorAll('.toggle-btn').forEach(b => b.classList.remove('active'));
  if (btn) btn.classList.add('active');
}}
function showHumanView(btn) {{
  document.getElementById('human-view').style.display = 'block';
  document.getElementById('llm-view').style.display = 'none';
  setActive(btn);
}}
function showLLMView(btn) {{
  document.getElementById('human-view').style.display = 'none';
  document.getElementById('llm-view').style.display = 'block';
  setActive(btn);
  setTimeout(() => {{
    const textArea = document.getElementById('llm-text');
    textArea.focus();
    textArea.select();
  }}, 100);
}}
</script>
</body>
</html>
"""

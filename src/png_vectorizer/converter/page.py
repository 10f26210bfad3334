"""Single-page browser UI served by the HTTP daemon."""

from __future__ import annotations

from string import Template

_PAGE = Template(
    """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>$title</title>
  <style>
    body { margin: 0; font-family: system-ui, sans-serif; background: #0b0b14; color: #e8e8f0; }
    header, footer { border-color: #2a2a3a; background: rgba(30, 30, 50, 0.5); }
    header { border-bottom: 1px solid #2a2a3a; padding: 1rem 2rem; display: flex; justify-content: space-between; }
    footer { border-top: 1px solid #2a2a3a; padding: 1.5rem; margin-top: 4rem; text-align: center; color: #8a8aa0; font-size: 0.875rem; }
    nav a { color: #19d3f5; margin-left: 1rem; text-decoration: none; }
    main { max-width: 36rem; margin: 3rem auto; padding: 0 1rem; }
    h1 { margin: 0; font-size: 1.25rem; color: #ff3cac; }
    h2 { font-size: 2.25rem; text-align: center; color: #ff3cac; }
    .lead { text-align: center; color: #a0a0b8; }
    .card { background: rgba(30, 30, 50, 0.3); border: 1px solid #2a2a3a; border-radius: 0.5rem; padding: 1.5rem; margin-top: 1.5rem; }
    #drop-zone { border: 2px dashed #19d3f5; border-radius: 0.5rem; padding: 2rem; text-align: center; cursor: pointer; }
    #drop-zone.over { border-color: #ff3cac; background: rgba(255, 60, 172, 0.05); }
    button { width: 100%; margin-top: 1.5rem; padding: 0.75rem; border: 0; border-radius: 0.5rem; font-size: 1rem;
             background: linear-gradient(90deg, #ff3cac, #784ba0, #19d3f5); color: #fff; cursor: pointer; }
    button:disabled { opacity: 0.6; cursor: progress; }
    .bar { height: 0.5rem; background: #2a2a3a; border-radius: 0.25rem; overflow: hidden; }
    .bar > div { height: 100%; width: 0; background: #19d3f5; transition: width 0.2s; }
    .row { display: flex; justify-content: space-between; font-size: 0.875rem; margin-bottom: 0.5rem; }
    .done { text-align: center; color: #ff3cac; font-size: 1.125rem; }
    [hidden] { display: none !important; }
  </style>
</head>
<body>
  <header>
    <h1>&#9889; $title</h1>
    <nav><a href="#">Home</a><a href="#">About</a><a href="#">Help</a></nav>
  </header>
  <main>
    <h2>Convert PNG to SVG</h2>
    <p class="lead">Transform your PNG images into scalable SVG format with our retro-futuristic converter</p>
    <div class="card">
      <div id="drop-zone">
        <input type="file" accept="$accept" id="file-input" hidden />
        <label for="file-input">
          <p id="file-name">Drop your PNG file here</p>
          <p class="lead">or click to browse files</p>
        </label>
      </div>
    </div>
    <button id="convert" hidden>Convert to SVG</button>
    <div class="card" id="progress-card" hidden>
      <div class="row"><span>Converting...</span><span id="progress-label">0%</span></div>
      <div class="bar"><div id="progress-bar"></div></div>
    </div>
    <div class="card" id="result-card" hidden>
      <div class="done">&#10003; Conversion Complete!</div>
      <button id="download">Download SVG</button>
    </div>
  </main>
  <footer>&copy; 2025 $title. All rights reserved.</footer>
  <script>
    const pollIntervalMs = $poll_interval_ms;
    const acceptedType = "$accept";
    let sessionId = null;
    let state = null;
    let poller = null;

    const el = (id) => document.getElementById(id);

    function render(next) {
      state = next;
      el("file-name").textContent = state.filename || "Drop your PNG file here";
      const converting = state.phase === "converting";
      el("convert").hidden = !(state.phase === "file_selected" || converting);
      el("convert").disabled = converting;
      el("convert").textContent = converting ? "Converting..." : "Convert to SVG";
      el("progress-card").hidden = !converting;
      el("progress-label").textContent = state.progress + "%";
      el("progress-bar").style.width = state.progress + "%";
      el("result-card").hidden = !(state.phase === "converted" && state.download_url);
    }

    async function call(method, path, body) {
      const response = await fetch(path, { method, body });
      if (!response.ok) {
        throw new Error(method + " " + path + " failed: " + response.status);
      }
      return response.json();
    }

    async function intake(file) {
      if (!file || file.type !== acceptedType) {
        return;
      }
      const form = new FormData();
      form.append("file", file, file.name);
      render(await call("PUT", "/v1/sessions/" + sessionId + "/file", form));
    }

    async function poll() {
      const next = await call("GET", "/v1/sessions/" + sessionId);
      if (state && state.phase === "converting") {
        render(next);
      }
    }

    async function convert() {
      render({ ...state, phase: "converting", progress: 0 });
      poller = setInterval(() => poll().catch(console.error), pollIntervalMs);
      try {
        render(await call("POST", "/v1/sessions/" + sessionId + "/convert"));
      } catch (error) {
        console.error("Conversion failed:", error);
        render(await call("GET", "/v1/sessions/" + sessionId));
      } finally {
        clearInterval(poller);
      }
    }

    function download() {
      if (!state || !state.download_url) {
        return;
      }
      const link = document.createElement("a");
      link.href = state.download_url;
      document.body.appendChild(link);
      link.click();
      document.body.removeChild(link);
    }

    const zone = el("drop-zone");
    zone.addEventListener("dragover", (event) => { event.preventDefault(); zone.classList.add("over"); });
    zone.addEventListener("dragleave", () => zone.classList.remove("over"));
    zone.addEventListener("drop", (event) => {
      event.preventDefault();
      zone.classList.remove("over");
      intake(event.dataTransfer.files[0]).catch(console.error);
    });
    el("file-input").addEventListener("change", (event) => {
      intake(event.target.files[0]).catch(console.error);
    });
    el("convert").addEventListener("click", () => convert().catch(console.error));
    el("download").addEventListener("click", download);

    call("POST", "/v1/sessions").then((created) => {
      sessionId = created.session_id;
      render(created);
    }).catch(console.error);
  </script>
</body>
</html>
"""
)


def render_page(
    *,
    title: str = "Vectorizer",
    accept: str = "image/png",
    poll_interval_ms: int = 200,
) -> str:
    """Render the single-page UI."""
    return _PAGE.substitute(
        title=title,
        accept=accept,
        poll_interval_ms=poll_interval_ms,
    )

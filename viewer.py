#!/usr/bin/env python3
"""
Web viewer for analyzing flag review exports in the browser.

Upload a CSV export (Task Link, Actioned Date, All Agent Flags,
All QA Flags, Agent) and the page lists overtags, undertags and the
L1 tags found. Each upload is analyzed on its own; nothing is stored
between requests.

Usage:
    python viewer.py              # Serve on http://localhost:5000
    python viewer.py --port 8080  # Custom port

Then open http://localhost:5000 in your browser.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

# Ensure project root is on path for src imports
sys.path.insert(0, str(Path(__file__).resolve().parent))

from flask import Flask, jsonify, render_template_string, request
from werkzeug.exceptions import RequestEntityTooLarge

from config.settings import config
from src.services.analysis_service import AnalysisOutcome, AnalysisService
from src.utils.log import setup_logging
from src.utils.tag_comparison import is_no_mismatch

logger = logging.getLogger("src.viewer")

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = config.viewer.max_upload_bytes

service = AnalysisService(config.analyzer)


HTML_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Tag Analysis Tool</title>
    <style>
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background: #f8f9fa;
            color: #1f2937;
        }
        .container { max-width: 56rem; margin: 0 auto; padding: 1rem; }
        .card {
            background: #fff;
            border: 1px solid #e5e7eb;
            border-radius: 0.5rem;
            box-shadow: 0 1px 2px rgba(0, 0, 0, 0.05);
        }
        .card-header { padding: 1.25rem 1.5rem 0.5rem; }
        .card-title { font-size: 1.5rem; font-weight: 600; }
        .card-title.small { font-size: 1rem; }
        .card-content { padding: 0.5rem 1.5rem 1.5rem; }
        .stack > * + * { margin-top: 1rem; }
        .upload {
            border: 2px dashed #d1d5db;
            border-radius: 0.5rem;
            padding: 1.5rem;
            text-align: center;
        }
        .upload label { cursor: pointer; display: flex; flex-direction: column; align-items: center; }
        .upload .icon { font-size: 2.5rem; color: #9ca3af; }
        .upload .hint { margin-top: 0.5rem; font-size: 0.875rem; color: #4b5563; }
        .upload input[type=file] { display: none; }
        .alert {
            border: 1px solid #fca5a5;
            background: #fef2f2;
            color: #b91c1c;
            border-radius: 0.5rem;
            padding: 0.75rem 1rem;
        }
        h3 { font-size: 1.125rem; font-weight: 600; margin-bottom: 0.5rem; }
        .grid { display: grid; grid-template-columns: 1fr 1fr; gap: 1rem; }
        .scroll { max-height: 15rem; overflow-y: auto; }
        .entry { padding: 0.25rem 0; border-bottom: 1px solid #e5e7eb; }
        .entry.none { color: #9ca3af; }
        .badges { display: flex; flex-wrap: wrap; gap: 0.5rem; }
        .badge {
            padding: 0.25rem 0.5rem;
            background: #dbeafe;
            color: #1e40af;
            border-radius: 9999px;
            font-size: 0.875rem;
        }
    </style>
</head>
<body>
<div class="container">
    <div class="card">
        <div class="card-header"><div class="card-title">Tag Analysis Tool</div></div>
        <div class="card-content stack">
            <form class="upload" method="post" enctype="multipart/form-data">
                <input type="file" name="file" accept=".csv" id="file-upload"
                       onchange="this.form.submit()">
                <label for="file-upload">
                    <span class="icon">&#8682;</span>
                    <span class="hint">Upload CSV file</span>
                </label>
            </form>

            {% if error %}
            <div class="alert" role="alert">{{ error }}</div>
            {% endif %}

            {% if results is not none %}
            <div class="stack">
                <div>
                    <h3>Analysis Results</h3>
                    <div class="grid">
                        {% for title, entries in [("Overtags", overtags), ("Undertags", undertags)] %}
                        <div class="card">
                            <div class="card-header"><div class="card-title small">{{ title }}</div></div>
                            <div class="card-content">
                                <div class="scroll">
                                    {% for entry in entries %}
                                    <div class="entry{% if entry.none %} none{% endif %}">{{ entry.text }}</div>
                                    {% endfor %}
                                </div>
                            </div>
                        </div>
                        {% endfor %}
                    </div>
                </div>

                <div class="card">
                    <div class="card-header"><div class="card-title small">L1 Tags Found</div></div>
                    <div class="card-content">
                        <div class="badges">
                            {% for tag in results.l1_tags %}
                            <span class="badge">{{ tag }}</span>
                            {% endfor %}
                        </div>
                    </div>
                </div>
            </div>
            {% endif %}
        </div>
    </div>
</div>
</body>
</html>
"""


def _display_entries(entries) -> list[dict]:
    """Text and sentinel flag for each overtag/undertag entry."""
    return [
        {"text": service.format_entry(entry), "none": is_no_mismatch(entry)}
        for entry in entries
    ]


def render_page(outcome: Optional[AnalysisOutcome] = None):
    """Render the upload page, with results or an error when given."""
    outcome = outcome or AnalysisOutcome()
    results = outcome.results
    return render_template_string(
        HTML_TEMPLATE,
        error=outcome.error,
        results=results,
        overtags=_display_entries(results.overtags) if results else [],
        undertags=_display_entries(results.undertags) if results else [],
    )


def _uploaded_file():
    """Return the uploaded file storage, or None when nothing was chosen."""
    upload = request.files.get("file")
    if upload is None or not upload.filename:
        return None
    return upload


@app.route("/", methods=["GET"])
def index():
    """Serve the upload page."""
    return render_page()


@app.route("/", methods=["POST"])
def analyze_upload():
    """Analyze an uploaded CSV and render the results page."""
    upload = _uploaded_file()
    if upload is None:
        return render_page()

    outcome = service.analyze(upload.stream, name=upload.filename)
    return render_page(outcome)


@app.route("/api/analyze", methods=["POST"])
def api_analyze():
    """Analyze an uploaded CSV and return the results as JSON."""
    upload = _uploaded_file()
    if upload is None:
        return jsonify({"error": "No file uploaded"}), 400

    outcome = service.analyze(upload.stream, name=upload.filename)
    if not outcome.ok:
        return jsonify(outcome.to_dict()), 400
    return jsonify(outcome.to_dict())


@app.route("/health")
def health():
    """Liveness check."""
    return jsonify({"status": "ok"})


def _format_size(num_bytes: int) -> str:
    """Human-readable size for upload limit messages."""
    if num_bytes >= 1024 * 1024 and num_bytes % (1024 * 1024) == 0:
        return f"{num_bytes // (1024 * 1024)} MB"
    return f"{num_bytes} bytes"


@app.errorhandler(RequestEntityTooLarge)
def upload_too_large(e):
    """Report uploads over the size limit in force."""
    limit = _format_size(app.config["MAX_CONTENT_LENGTH"])
    message = f"Error parsing CSV: file exceeds {limit} limit"
    logger.warning(message)
    if request.path.startswith("/api/"):
        return jsonify({"error": message}), 413
    return render_page(AnalysisOutcome(error=message)), 413


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Tag Analysis Tool - compare agent and QA flags in the browser"
    )
    parser.add_argument(
        "--host",
        default=config.viewer.host,
        help=f"Host to bind (default: {config.viewer.host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=config.viewer.port,
        help=f"Port to run the server on (default: {config.viewer.port})",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=config.viewer.debug,
        help="Run Flask in debug mode",
    )
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    setup_logging(config.logging, verbose=args.debug)

    print()
    print("╔══════════════════════════════════════════════════════╗")
    print("║               TAG ANALYSIS TOOL                      ║")
    print("╚══════════════════════════════════════════════════════╝")
    print(f"\n   http://{args.host}:{args.port}\n")
    print("Press CTRL+C to stop the server")
    print()

    app.run(host=args.host, debug=args.debug, port=args.port)

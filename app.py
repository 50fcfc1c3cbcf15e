from flask import Flask, request, jsonify, send_file
from werkzeug.utils import secure_filename

from index_engine.config import load_settings
from index_engine.errors import ConfigurationError, IndexerError
from index_engine.log_config import setup_logging
from index_engine.odt import default_output_path, read_content_xml
from index_engine.pipeline import index_document, index_odt_file
from index_engine.synth import Entry, Header, iter_index

import io, os, logging, tempfile
from collections import Counter
from datetime import datetime
import pytz

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["INDEX_SETTINGS"] = None
app.config["INDEX_SETTINGS_FILE"] = os.environ.get("INDEX_SETTINGS_FILE")
app.config["INDEX_TIMEZONE"] = os.environ.get("INDEX_TIMEZONE", "UTC")

def settings():
    if app.config["INDEX_SETTINGS"] is None:
        app.config["INDEX_SETTINGS"] = load_settings(app.config["INDEX_SETTINGS_FILE"])
    return app.config["INDEX_SETTINGS"]

def save_upload(tmpdir):
    """Store the uploaded 'document' field in tmpdir; None if nothing was sent."""
    f = request.files.get("document")
    if f is None or not f.filename:
        return None
    name = secure_filename(f.filename) or "document.odt"
    path = os.path.join(tmpdir, name)
    f.save(path)
    return path

def letter_counts(registry):
    counts, header = Counter(), None
    for item in iter_index(registry):
        if isinstance(item, Header):
            header = item.text
        elif isinstance(item, Entry):
            counts[header] += 1
    return dict(counts)

@app.errorhandler(ConfigurationError)
def configuration_error(e):
    # the server is missing its index styles, not the client's fault
    logger.error("index settings unusable: %s", e)
    return jsonify({"error": str(e), "kind": type(e).__name__}), 500

@app.errorhandler(IndexerError)
def indexer_error(e):
    logger.warning("indexing rejected: %s", e)
    return jsonify({"error": str(e), "kind": type(e).__name__}), 400

@app.route("/health")
def health():
    return jsonify({"ok": True})

@app.route("/index", methods=["POST"])
def index_route():
    with tempfile.TemporaryDirectory() as tmpdir:
        src = save_upload(tmpdir)
        if src is None:
            return jsonify({"error": "no 'document' file uploaded"}), 400
        out = index_odt_file(src, settings())
        with open(out, "rb") as fh:
            payload = io.BytesIO(fh.read())
    return send_file(
        payload,
        mimetype="application/vnd.oasis.opendocument.text",
        as_attachment=True,
        download_name=default_output_path(os.path.basename(src)).name,
    )

@app.route("/preview", methods=["POST"])
def preview():
    with tempfile.TemporaryDirectory() as tmpdir:
        src = save_upload(tmpdir)
        if src is None:
            return jsonify({"error": "no 'document' file uploaded"}), 400
        doc = index_document(read_content_xml(src), settings())

    tz = pytz.timezone(app.config["INDEX_TIMEZONE"])
    return jsonify({
        "terms": len(doc.registry),
        "anchors": doc.registry.anchor_count(),
        "byLetter": letter_counts(doc.registry),
        "created_at": datetime.now(tz).strftime("%Y-%m-%d %H:%M:%S"),
    })

if __name__ == "__main__":
    setup_logging()
    settings()  # missing styles should stop the server before it accepts uploads
    app.run()

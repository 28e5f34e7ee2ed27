#!/usr/bin/env python3
"""
Flask Web Application for Call Tree Analyzer
Provides REST API endpoints for analyzing and transforming call trees.
"""

from flask import Flask, request, jsonify
from werkzeug.utils import secure_filename
import json
import logging
import os
import tempfile
from call_tree_analyzer import (
    CallTreeAnalyzer,
    TraceFormatError,
    TreeConverter,
    anonymize,
    apply_filters,
    deep_search,
    structural_digest,
    structural_hash,
)
from call_tree_analyzer.core.types import DURATION_UNITS
from call_tree_analyzer.web import prepare_results

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = 500 * 1024 * 1024
app.config['UPLOAD_FOLDER'] = tempfile.gettempdir()

ALLOWED_EXTENSIONS = {'json'}


class RequestError(ValueError):
    """Client supplied an unusable request body."""


def allowed_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def form_flag(name, default='false'):
    return request.form.get(name, default).lower() == 'true'


def parse_filters(raw):
    """Decode and check a list of {field, operator, value} filter clauses."""
    if raw is None or raw == '':
        return []
    filters = json.loads(raw) if isinstance(raw, str) else raw
    if not isinstance(filters, list) or not all(isinstance(f, dict) for f in filters):
        raise RequestError('Filters must be a JSON list of objects')
    return filters


def json_body(*required):
    """Return the JSON body, checking that the required keys are present."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise RequestError('Request body must be a JSON object')
    for key in required:
        if key not in body:
            raise RequestError(f"Missing '{key}' in request body")
    return body


def json_node(body, key):
    value = body[key]
    if not isinstance(value, dict):
        raise RequestError(f"'{key}' must be a node object")
    return value


@app.errorhandler(RequestError)
def handle_request_error(e):
    return jsonify({'error': str(e)}), 400


@app.route('/api/analyze', methods=['POST'])
def analyze_api():
    """
    API endpoint to analyze a call trace file.
    Accepts: multipart/form-data with fields:
      - 'file': JSON array of nodes or a single node tree
      - 'filters': JSON list of {field, operator, value} (optional)
      - 'search': deep search query (optional)
      - 'highlight': id of a node to return as 'highlighted' (optional)
      - 'case_sensitive': 'true'|'false' (optional, default: 'false')
      - 'anonymize': 'true'|'false' (optional, default: 'false')
      - 'duration_unit': 'ms'|'s'|'us' (optional, default: 'ms')
      - 'strip_flattened_children': 'true'|'false' (optional, default: 'false')
    Returns: JSON with analysis results
    """
    if 'file' not in request.files:
        return jsonify({'error': 'No file provided'}), 400

    file = request.files['file']

    if not file.filename:
        return jsonify({'error': 'No file selected'}), 400

    if not allowed_file(file.filename):
        return jsonify({'error': 'Invalid file type. Only JSON files are allowed.'}), 400

    duration_unit = request.form.get('duration_unit', 'ms')
    if duration_unit not in DURATION_UNITS:
        return jsonify({'error': f"Invalid duration unit '{duration_unit}'"}), 400

    try:
        filters = parse_filters(request.form.get('filters'))
    except ValueError as e:
        return jsonify({'error': f'Invalid filters: {e}'}), 400

    search_query = request.form.get('search') or None
    highlight_id = request.form.get('highlight') or None

    filename = secure_filename(file.filename)
    filepath = os.path.join(app.config['UPLOAD_FOLDER'], filename)

    try:
        file.save(filepath)

        analyzer = CallTreeAnalyzer(
            duration_unit=duration_unit,
            case_sensitive_search=form_flag('case_sensitive'),
            strip_flattened_children=form_flag('strip_flattened_children')
        )
        analyzer.process_trace_file(filepath)

        results = prepare_results(
            analyzer,
            filters=filters,
            search_query=search_query,
            highlight_id=highlight_id,
            anonymize_output=form_flag('anonymize')
        )
        results['filename'] = filename

        return jsonify(results)

    except TraceFormatError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logger.exception("Failed to analyze %s", filename)
        return jsonify({'error': str(e)}), 500
    finally:
        if os.path.exists(filepath):
            os.remove(filepath)


@app.route('/api/tree/build', methods=['POST'])
def build_tree_api():
    """Rebuild a tree from {"nodes": [...]}."""
    body = json_body('nodes')
    nodes = body['nodes']
    if not isinstance(nodes, list) or not all(isinstance(n, dict) for n in nodes):
        raise RequestError("'nodes' must be a list of node objects")
    return jsonify({'tree': TreeConverter.build_tree(nodes)})


@app.route('/api/tree/flatten', methods=['POST'])
def flatten_api():
    """Flatten {"tree": ...} into a pre-order node list."""
    body = json_body('tree')
    nodes = TreeConverter.flatten(
        json_node(body, 'tree'),
        strip_children=bool(body.get('strip_children', False))
    )
    return jsonify({'nodes': nodes})


@app.route('/api/tree/filter', methods=['POST'])
def filter_api():
    """Prune {"tree": ..., "filters": [...]} to matching nodes and their ancestors."""
    body = json_body('tree')
    try:
        filters = parse_filters(body.get('filters'))
    except ValueError as e:
        raise RequestError(f'Invalid filters: {e}')
    return jsonify({'tree': apply_filters(json_node(body, 'tree'), filters)})


@app.route('/api/tree/search', methods=['POST'])
def search_api():
    """Find the first node containing {"query": ...} in {"tree": ...}."""
    body = json_body('tree', 'query')
    query = body['query']
    if not isinstance(query, str):
        raise RequestError("'query' must be a string")
    match = deep_search(
        json_node(body, 'tree'), query, bool(body.get('case_sensitive', False))
    )
    return jsonify({'match': match})


@app.route('/api/tree/anonymize', methods=['POST'])
def anonymize_api():
    """Return an anonymized copy of {"tree": ...}."""
    body = json_body('tree')
    return jsonify({'tree': anonymize(json_node(body, 'tree'))})


@app.route('/api/tree/hash', methods=['POST'])
def hash_api():
    """Structural hash and digest of {"node": ...}."""
    body = json_body('node')
    node = json_node(body, 'node')
    return jsonify({'hash': structural_hash(node), 'digest': structural_digest(node)})


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    app.run(debug=True, host='0.0.0.0', port=5001)

"""
Web API for managing the emulated tag population
"""

import threading
import logging
from typing import List, Tuple
from flask import Flask, request, jsonify
from flask_socketio import SocketIO
from .config import get_config
from .tag import Tag, get_index_of_tag
from .records import build_tag, load_tags_from_file, write_tags_to_csv
from .report import BatcherConfig, ReportBatcher
from .exceptions import TagEmuError, RecordParseError, TagFileError

# Load configuration
config = get_config()

app = Flask(__name__)
app.config.from_object(config)
socketio = SocketIO(app, cors_allowed_origins=config.SOCKETIO_CORS_ALLOWED_ORIGINS,
                    async_mode=config.SOCKETIO_ASYNC_MODE)

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL),
    format=config.LOG_FORMAT
)
logger = logging.getLogger(__name__)

class TagStore:
    """Thread-safe collection of unique tags, keyed by EPC"""

    def __init__(self, tags: List[Tag] = None):
        self._lock = threading.Lock()
        self._tags: List[Tag] = []
        for tag in tags or []:
            if get_index_of_tag(self._tags, tag) < 0:
                self._tags.append(tag)

    def snapshot(self) -> List[Tag]:
        with self._lock:
            return list(self._tags)

    def add(self, tags: List[Tag]) -> Tuple[List[Tag], List[Tag]]:
        """Add tags whose EPC is not stored yet, returns (added, duplicates)"""
        added, duplicates = [], []
        with self._lock:
            for tag in tags:
                if get_index_of_tag(self._tags, tag) < 0:
                    self._tags.append(tag)
                    added.append(tag)
                else:
                    duplicates.append(tag)
        return added, duplicates

    def delete(self, tags: List[Tag]) -> Tuple[List[Tag], List[Tag]]:
        """Remove tags by EPC, returns (deleted, not_found)"""
        deleted, not_found = [], []
        with self._lock:
            for tag in tags:
                index = get_index_of_tag(self._tags, tag)
                if index < 0:
                    not_found.append(tag)
                else:
                    deleted.append(self._tags.pop(index))
        return deleted, not_found

    def clear(self) -> None:
        with self._lock:
            self._tags = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._tags)

def _initial_tags() -> List[Tag]:
    try:
        return load_tags_from_file(config.TAG_FILE)
    except TagFileError as e:
        logger.info(f"Starting with no tags: {e}")
        return []

tag_store = TagStore(_initial_tags())

def _parse_tag_list(data) -> Tuple[List[Tag], List[dict]]:
    """Parse a JSON list of TagInString objects, collecting per-entry errors"""
    tags, errors = [], []
    for i, entry in enumerate(data):
        try:
            if not isinstance(entry, dict):
                raise RecordParseError(f"Entry is not an object: {entry!r}")
            record = [entry.get(key) for key in ('PCBits', 'Length', 'EPCLengthBits', 'EPC')]
            if not all(isinstance(value, str) for value in record):
                raise RecordParseError("PCBits, Length, EPCLengthBits and EPC must be strings")
            tags.append(build_tag(record))
        except RecordParseError as e:
            errors.append({'index': i, 'error': str(e)})
    return tags, errors

def _tags_json(tags: List[Tag]) -> List[dict]:
    return [tag.in_string().as_dict() for tag in tags]

def _notify_tags_updated():
    socketio.emit('tags_updated', {'count': len(tag_store)})

@app.route('/api/tags', methods=['GET'])
def api_get_tags():
    """List the current tags"""
    return jsonify({'success': True, 'tags': _tags_json(tag_store.snapshot())})

@app.route('/api/tags', methods=['POST'])
def api_add_tags():
    """Add tags, skipping EPCs that are already present"""
    data = request.get_json(silent=True)
    if not isinstance(data, list):
        return jsonify({'success': False, 'message': 'Expected a list of tags'}), 400

    tags, errors = _parse_tag_list(data)
    added, duplicates = tag_store.add(tags)
    logger.info(f"Added {len(added)} tags, {len(duplicates)} duplicates, {len(errors)} invalid")
    if added:
        _notify_tags_updated()
    return jsonify({
        'success': True,
        'added': _tags_json(added),
        'duplicates': _tags_json(duplicates),
        'errors': errors
    })

@app.route('/api/tags', methods=['DELETE'])
def api_delete_tags():
    """Delete tags by EPC"""
    data = request.get_json(silent=True)
    if not isinstance(data, list):
        return jsonify({'success': False, 'message': 'Expected a list of tags'}), 400

    tags, errors = _parse_tag_list(data)
    deleted, not_found = tag_store.delete(tags)
    logger.info(f"Deleted {len(deleted)} tags, {len(not_found)} not found, {len(errors)} invalid")
    if deleted:
        _notify_tags_updated()
    return jsonify({
        'success': True,
        'deleted': _tags_json(deleted),
        'not_found': _tags_json(not_found),
        'errors': errors
    })

@app.route('/api/reports', methods=['GET'])
def api_reports():
    """Show how the current tags are split into reports"""
    try:
        batcher = ReportBatcher(BatcherConfig.from_config(config, app.config['PDU_BUDGET']))
        trds = batcher.build(tag_store.snapshot())
    except TagEmuError as e:
        logger.error(f"Building reports failed: {e}")
        return jsonify({'success': False, 'message': f'Error: {str(e)}'}), 500

    return jsonify({
        'success': True,
        'pdu_budget': batcher.config.pdu_budget,
        'total_tag_count': trds.total_tag_counts(),
        'reports': [
            {'tag_count': trd.tag_count, 'size': len(trd), 'oversized': trd.oversized}
            for trd in trds
        ]
    })

@app.route('/api/tags/save', methods=['POST'])
def api_save_tags():
    """Persist the current tags to the tag file"""
    output = app.config['TAG_FILE']
    try:
        failed = write_tags_to_csv(tag_store.snapshot(), output)
    except TagFileError as e:
        logger.error(f"Save tags error: {e}")
        return jsonify({'success': False, 'message': f'Error: {str(e)}'}), 500
    return jsonify({'success': failed == 0, 'file': output, 'failed': failed})

@socketio.on('connect')
def handle_connect(auth=None):
    """WebSocket client connected"""
    logger.info(f"WebSocket client connected: {request.sid}")
    socketio.emit('status', {'message': 'Connected to server', 'count': len(tag_store)})

@socketio.on('disconnect')
def handle_disconnect(reason=None):
    """WebSocket client disconnected"""
    logger.info(f"WebSocket client disconnected: {request.sid}")

if __name__ == '__main__':
    logger.info(f"Starting tag emulator API on {config.HOST}:{config.PORT}")
    socketio.run(app, debug=config.DEBUG, host=config.HOST, port=config.PORT)

"""
REST API for the timetable manager.
Provides HTTP endpoints for the catalogs, timetable generation, manual
entries and the available-slots report.
"""
import dataclasses
import logging
import time
from typing import Dict, Any, Optional

from flask import Flask, request, jsonify, abort
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .data.store import COLLECTIONS, RecordNotFound
from .models.entities import EntryCandidate, EntryAdded, ScheduleConflict
from .scheduler import TimetableService, create_store

logger = logging.getLogger(__name__)

# Collections exposed through the generic CRUD routes
CATALOGS = ('courses', 'teachers', 'rooms', 'timings')

SET_FIELDS = {'subjects', 'availability', 'equipment'}
LIST_FIELDS = SET_FIELDS | {'days'}

# Accept the field names the web frontend sends
FIELD_ALIASES = {
    'startTime': 'start_time',
    'endTime': 'end_time',
}
KIND_ALIAS_COLLECTIONS = ('timings', 'timetable')


def _to_json(record: Any) -> Dict[str, Any]:
    data = dataclasses.asdict(record)
    for name in SET_FIELDS & data.keys():
        data[name] = sorted(data[name])
    return data


def _normalize(collection: str, body: Dict[str, Any]) -> Dict[str, Any]:
    values = {}
    for key, value in body.items():
        key = FIELD_ALIASES.get(key, key)
        if key == 'type' and collection in KIND_ALIAS_COLLECTIONS:
            key = 'kind'
        if key in LIST_FIELDS and value is not None and not isinstance(value, list):
            abort(400, description=f"{key} must be a JSON array")
        if key in SET_FIELDS and value is not None:
            value = set(value)
        values[key] = value
    return values


def _json_body() -> Dict[str, Any]:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        abort(400, description="Request body must be a JSON object")
    return body


def _record_from_json(collection: str, body: Dict[str, Any]) -> Any:
    """Build a catalog record from a request body."""
    record_type = COLLECTIONS[collection]
    values = _normalize(collection, body)

    known = {f.name for f in dataclasses.fields(record_type)}
    unknown = set(values) - known
    if unknown:
        abort(400, description=f"Unknown fields for {collection}: {', '.join(sorted(unknown))}")

    values.setdefault('id', '')
    try:
        return record_type(**values)
    except (TypeError, ValueError, AttributeError) as e:
        abort(400, description=f"Invalid {collection} record: {e}")


def create_app(service: Optional[TimetableService] = None) -> Flask:
    """
    Create the Flask application.

    Args:
        service: Service to expose; built from the environment if omitted
    """
    app = Flask(__name__)
    CORS(app)  # Enable CORS for all routes

    if service is None:
        service = TimetableService(create_store())
    app.config['TIMETABLE_SERVICE'] = service

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({'error': e.description}), e.code

    @app.errorhandler(RecordNotFound)
    def handle_not_found(e):
        logger.warning(str(e))
        return jsonify({'error': str(e)}), 404

    @app.route('/api/v1/health', methods=['GET'])
    def health_check():
        """Health check endpoint."""
        return jsonify({
            'status': 'healthy',
            'timestamp': time.time()
        })

    @app.route('/api/v1/<collection>', methods=['GET'])
    def list_records(collection):
        """List a catalog."""
        if collection not in CATALOGS:
            abort(404, description=f"Unknown collection: {collection}")
        return jsonify([_to_json(r) for r in service.store.list_records(collection)])

    @app.route('/api/v1/<collection>', methods=['POST'])
    def add_record(collection):
        """Add a catalog record."""
        if collection not in CATALOGS:
            abort(404, description=f"Unknown collection: {collection}")
        record = _record_from_json(collection, _json_body())
        try:
            record = service.store.add(collection, record)
        except ValueError as e:
            abort(400, description=str(e))
        return jsonify(_to_json(record)), 201

    @app.route('/api/v1/<collection>/<record_id>', methods=['PUT'])
    def update_record(collection, record_id):
        """Update fields of a catalog record."""
        if collection not in CATALOGS:
            abort(404, description=f"Unknown collection: {collection}")
        try:
            record = service.store.update(collection, record_id, _normalize(collection, _json_body()))
        except ValueError as e:
            abort(400, description=str(e))
        return jsonify(_to_json(record))

    @app.route('/api/v1/<collection>/<record_id>', methods=['DELETE'])
    def delete_record(collection, record_id):
        """Delete a catalog record."""
        if collection not in CATALOGS:
            abort(404, description=f"Unknown collection: {collection}")
        if not service.store.delete(collection, record_id):
            raise RecordNotFound(collection, record_id)
        return jsonify({'message': f"{collection} record {record_id} deleted successfully"})

    @app.route('/api/v1/timetable', methods=['GET'])
    def get_timetable():
        """List timetable entries."""
        return jsonify([_to_json(e) for e in service.store.list_timetable_entries()])

    @app.route('/api/v1/timetable', methods=['POST'])
    def add_timetable_entry():
        """Insert a manual timetable entry."""
        values = _normalize('timetable', _json_body())
        values.pop('id', None)
        try:
            candidate = EntryCandidate(**values)
        except (TypeError, ValueError, AttributeError) as e:
            abort(400, description=f"Invalid timetable entry: {e}")

        result = service.insert_manual_entry(candidate)
        if isinstance(result, EntryAdded):
            return jsonify(_to_json(result.entry)), 201

        kind = 'schedule-conflict' if isinstance(result, ScheduleConflict) else 'teacher-unavailable'
        return jsonify({'error': result.message, 'kind': kind}), 409

    @app.route('/api/v1/timetable/<entry_id>', methods=['DELETE'])
    def delete_timetable_entry(entry_id):
        """Delete a timetable entry."""
        if not service.delete_entry(entry_id):
            raise RecordNotFound('timetable', entry_id)
        return jsonify({'message': f"Entry {entry_id} deleted successfully"})

    @app.route('/api/v1/timetable/generate', methods=['POST'])
    def generate_timetable():
        """Generate a new timetable."""
        result = service.generate_timetable()
        if not result.success:
            return jsonify({'error': result.message, 'reason': result.reason.value}), 400

        return jsonify({
            'timetable': [_to_json(e) for e in result.entries],
            'message': result.message,
            'unassigned': result.unassigned
        })

    @app.route('/api/v1/timetable/clear', methods=['POST'])
    def clear_timetable():
        """Remove every timetable entry."""
        service.clear_timetable()
        return jsonify({'message': 'Timetable cleared successfully'})

    @app.route('/api/v1/available-slots', methods=['GET'])
    def available_slots():
        """Free slots with the teachers and rooms that could take them."""
        return jsonify([s.to_dict() for s in service.available_slots()])

    return app

"""
Flask backend application for acquisitions analytics
"""
import os
import sys
from pathlib import Path

# Load environment variables from .env file if it exists
from dotenv import load_dotenv

backend_env = Path(__file__).parent / '.env'
root_env = Path(__file__).parent.parent / '.env'
if backend_env.exists():
    load_dotenv(backend_env)
    print(f"[Backend] Loaded environment variables from {backend_env}")
elif root_env.exists():
    load_dotenv(root_env)
    print(f"[Backend] Loaded environment variables from {root_env}")

from flask import Flask, request, jsonify
from flask_cors import CORS

sys.path.insert(0, str(Path(__file__).parent))

from acquisitions.data_ingestion import load_class_records
from acquisitions.history import (
    ANALYSIS_SECTIONS,
    METRIC_DEFINITIONS,
    AnalysisOverrideStore,
    analysis_context_id,
    compute_history_indicators,
    load_config_file,
    resolve_analysis,
    resolve_config,
    scope_context_name,
)


def _base_config():
    config_path = os.environ.get('ACQ_CONFIG_PATH')
    if not config_path:
        return {}
    print(f"[Backend] Loading analysis config from {config_path}")
    return load_config_file(config_path)


def create_app(base_config=None, override_store=None):
    """
    Build the Flask app.

    base_config: analysis config applied under each request's config
    override_store: AnalysisOverrideStore for narrative text (process-local by default)
    """
    app = Flask(__name__)
    origins = [o.strip() for o in os.environ.get('CORS_ORIGINS', '').split(',') if o.strip()]
    CORS(app, origins=origins or '*')

    base_cfg = dict(base_config if base_config is not None else _base_config())
    store = override_store if override_store is not None else AnalysisOverrideStore()
    app.config['ANALYSIS_OVERRIDES'] = store

    @app.route('/health', methods=['GET'])
    def health():
        """Health check endpoint"""
        return jsonify({'status': 'ok'}), 200

    @app.route('/acquisitions/history-y5/indicators', methods=['POST'])
    def history_indicators():
        """
        Compute Year 5 history indicators for one scope.

        Request body:
        - records: list (history class records of the scope, required)
        - allRecords: list (every uploaded class record, used for the Arabic cross-analysis)
        - config: dict (optional analysis config)
        - scope: str (district | school | class, default district)
        - schoolName / className: str (used to name school and class scopes)

        Returns:
        - success: bool
        - indicators: dict
        - analysis: dict of section -> {reading, diagnosis, recommendation}
        - definitions: dict of section -> {title, concept, method}
        - contextId: str
        """
        data = request.get_json(silent=True)
        if not data:
            return jsonify({'success': False, 'error': 'No JSON data provided'}), 400
        if 'records' not in data:
            return jsonify({'success': False, 'error': 'records is required'}), 400

        try:
            records = load_class_records(records=data.get('records'))
            all_records = load_class_records(records=data.get('allRecords') or [])
        except ValueError as e:
            return jsonify({'success': False, 'error': str(e)}), 400

        cfg = dict(base_cfg)
        cfg.update(data.get('config') or {})
        cfg = resolve_config(cfg)

        scope = data.get('scope') or 'district'
        context_name = scope_context_name(
            scope, data.get('schoolName'), data.get('className'), cfg.get('district_name')
        )
        context_id = analysis_context_id(context_name, scope)

        try:
            indicators = compute_history_indicators(records, all_records, cfg)
        except Exception as e:
            print(f"[Backend] Error computing history indicators: {e}")
            import traceback
            traceback.print_exc()
            return jsonify({'success': False, 'error': str(e)}), 500

        analysis = {
            section: resolve_analysis(section, indicators, store, context_id)
            for section in ANALYSIS_SECTIONS
        }
        print(f"[Backend] History indicators for {context_id}: {indicators['student_count']} students")
        return jsonify({
            'success': True,
            'indicators': indicators,
            'analysis': analysis,
            'definitions': METRIC_DEFINITIONS,
            'contextId': context_id,
        }), 200

    @app.route('/acquisitions/history-y5/analysis/<section>', methods=['GET', 'PUT', 'DELETE'])
    def history_analysis_override(section):
        """
        Read, save or reset inspector-edited analysis text.

        contextId comes from the query string (GET/DELETE) or the JSON body (PUT).
        PUT body: {contextId, content: {reading, diagnosis, recommendation}}
        """
        if section not in ANALYSIS_SECTIONS:
            return jsonify({'success': False, 'error': f'Unknown section: {section}'}), 404

        if request.method == 'PUT':
            data = request.get_json(silent=True) or {}
            context_id = data.get('contextId')
            if not context_id:
                return jsonify({'success': False, 'error': 'contextId is required'}), 400
            try:
                saved = store.save(section, context_id, data.get('content'))
            except ValueError as e:
                return jsonify({'success': False, 'error': str(e)}), 400
            print(f"[Backend] Saved analysis override {section} for {context_id}")
            return jsonify({'success': True, 'section': section, 'contextId': context_id, 'override': saved}), 200

        context_id = request.args.get('contextId')
        if not context_id:
            return jsonify({'success': False, 'error': 'contextId is required'}), 400

        if request.method == 'DELETE':
            removed = store.reset(section, context_id)
            return jsonify({'success': True, 'section': section, 'contextId': context_id, 'removed': removed}), 200

        return jsonify({
            'success': True,
            'section': section,
            'contextId': context_id,
            'override': store.get(section, context_id),
        }), 200

    return app


app = create_app()


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))
    app.run(host='0.0.0.0', port=port, debug=True)

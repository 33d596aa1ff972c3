# ==============================================================================
# partner_commission/main/routes.py
# ------------------------------------------------------------------------------
# JSON API for uploads and partner queries. The routes stay thin: they parse
# the request, call the engine and the record store, and shape the response.
# ==============================================================================

import io
from flask import jsonify, request, current_app
from werkzeug.exceptions import HTTPException
from werkzeug.utils import secure_filename

from partner_commission.main import bp
from partner_commission.calculator.errors import (AuthenticationError, CommissionError,
                                                  InvalidInputError, NotFoundError)
from partner_commission.calculator.normalizer import build_record_set
from partner_commission.calculator.validator import allowed_file, read_excel_grid
from partner_commission.main.forms import DateRangeForm, PartnerLoginForm
from partner_commission.main.utils import (get_credential_provider, get_record_store, now_iso,
                                           prepare_partner_records, prepare_partner_report,
                                           reporting_tz)

# --- Error Handlers ---

@bp.app_errorhandler(CommissionError)
def handle_commission_error(e):
    if e.status_code >= 500:
        current_app.logger.error(f"{type(e).__name__}: {e.message} ({e.details})")
    else:
        current_app.logger.warning(f"{type(e).__name__}: {e.message}")
    body = {'success': False, 'error': e.message}
    if e.details:
        body['details'] = e.details
    return jsonify(body), e.status_code


@bp.app_errorhandler(HTTPException)
def handle_http_error(e):
    message = 'Endpoint not found' if e.code == 404 else e.description
    return jsonify({'success': False, 'error': message}), e.code

# --- Helper Functions ---

def _replace_records(payload, source):
    """Normalizes the payload and replaces the stored record set with it."""
    records = build_record_set(payload, tz=reporting_tz())
    count = get_record_store().replace_all(records)
    current_app.logger.info(f"Upload from {source} replaced the record set with {count} records.")
    return jsonify({
        'success': True,
        'message': f'Successfully uploaded {count} records',
        'recordCount': count,
        'timestamp': now_iso()
    })


def _partner_scope(partner_code):
    """Resolves the partner and the date-filtered records for a partner query."""
    partner = get_credential_provider().get_partner(partner_code)
    if partner is None:
        raise NotFoundError('Partner not found')

    form = DateRangeForm(request.args)
    if not form.validate():
        raise InvalidInputError('Invalid date range', details=form.errors)
    from_date, to_date = form.bounds

    records = get_record_store().query(from_date, to_date)
    return partner, records, {'fromDate': from_date, 'toDate': to_date}

# --- Routes ---

@bp.route('/api/health')
def health():
    return jsonify({
        'status': 'OK',
        'timestamp': now_iso(),
        'version': current_app.config['APP_VERSION']
    })


@bp.route('/api/upload-excel', methods=['POST'])
def upload_excel():
    """Replaces all records with the rows of the first sheet of an uploaded workbook."""
    file = request.files.get('excelFile')
    if file is None or file.filename == '':
        raise InvalidInputError('No file uploaded')

    filename = secure_filename(file.filename)
    if not allowed_file(filename, current_app.config['ALLOWED_EXTENSIONS']):
        raise InvalidInputError('File type not allowed. Please upload an .xlsx file.')

    grid = read_excel_grid(io.BytesIO(file.read()))
    return _replace_records(grid, source=filename)


@bp.route('/api/upload-json', methods=['POST'])
def upload_json():
    """Replaces all records with pre-parsed rows: {"data": [[...], ...]} or {"data": [{...}, ...]}."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise InvalidInputError('Request body must be a JSON object with a "data" list.')
    return _replace_records(body.get('data'), source='JSON upload')


@bp.route('/api/partner/login', methods=['POST'])
def partner_login():
    if request.is_json and not isinstance(request.get_json(silent=True), dict):
        raise InvalidInputError('Partner code and password required')
    form = PartnerLoginForm()
    if not form.validate_on_submit():
        raise InvalidInputError('Partner code and password required', details=form.errors)

    provider = get_credential_provider()
    code = str(form.partner_code.data).strip().lower()
    if not provider.verify(code, form.password.data):
        raise AuthenticationError('Invalid credentials')

    partner = provider.get_partner(code)
    current_app.logger.info(f"Partner '{code}' logged in.")
    return jsonify({'success': True, 'partner': partner})


@bp.route('/api/partner/<partner_code>/data')
def partner_data(partner_code):
    partner, records, date_range = _partner_scope(partner_code)
    data = prepare_partner_records(records, partner['code'])
    return jsonify({
        'success': True,
        'partner': partner['code'],
        'recordCount': len(data),
        'data': data,
        'dateRange': date_range,
        'lastUpdated': now_iso()
    })


@bp.route('/api/partner/<partner_code>/summary')
def partner_summary(partner_code):
    partner, records, date_range = _partner_scope(partner_code)
    report = prepare_partner_report(records, partner['code'])
    return jsonify({
        'success': True,
        'partner': partner['code'],
        'summary': report['summary'],
        'dateRange': date_range,
        'lastUpdated': now_iso()
    })


@bp.route('/api/partner/<partner_code>/monthly')
def partner_monthly(partner_code):
    partner, records, date_range = _partner_scope(partner_code)
    report = prepare_partner_report(records, partner['code'], include_monthly=True)
    return jsonify({
        'success': True,
        'partner': partner['code'],
        'summary': report['summary'],
        'monthly': report['monthly'],
        'dateRange': date_range,
        'lastUpdated': now_iso()
    })


@bp.route('/api/system/info')
def system_info():
    last_upload = get_record_store().last_upload()
    return jsonify({
        'success': True,
        'lastUpload': last_upload['timestamp'] if last_upload else None,
        'metadata': {'recordCount': last_upload['recordCount']} if last_upload else {}
    })

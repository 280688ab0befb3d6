"""
CSV export, template and import routes
"""

from flask import Response, jsonify, request

from teamstock.buisness.csv_transfer import export_filename, import_csv, template
from teamstock.buisness.errors import CSVImportError
from teamstock.data.users.permissions import EXPORT_DATA, IMPORT_DATA
from . import actor, api, context, logger, permission_required


def _csv_response(text, filename):
    return Response(
        text,
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename="{filename}"'},
    )


def _uploaded_text():
    upload = request.files.get('file')
    if upload is not None:
        raw = upload.read()
    else:
        raw = request.get_data()
    if not raw:
        raise CSVImportError("No CSV file was uploaded")
    try:
        return raw.decode('utf-8-sig')
    except UnicodeDecodeError as e:
        raise CSVImportError("CSV file must be UTF-8 encoded") from e


@api.route('/csv/<kind>/export', methods=['GET'])
@permission_required(EXPORT_DATA)
def export_csv(kind):
    text = context().reports.export(kind, bom_id=request.args.get('bom_id'), team=request.args.get('team'))
    return _csv_response(text, export_filename(kind))


@api.route('/csv/<kind>/template', methods=['GET'])
@permission_required(EXPORT_DATA, IMPORT_DATA)
def csv_template(kind):
    return _csv_response(template(kind, context().config), f"{kind}-template.csv")


@api.route('/csv/<kind>/import', methods=['POST'])
@permission_required(IMPORT_DATA)
def import_csv_file(kind):
    ctx = context()
    records = import_csv(_uploaded_text(), kind, ctx.repositories, ctx.config)
    logger.info(f"{actor()} imported {len(records)} '{kind}' record(s)")
    return jsonify({
        'imported': len(records),
        'records': [record.to_dict() for record in records],
    }), 201

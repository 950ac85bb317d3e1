from flask import Flask, request, jsonify, send_file
from flask_cors import CORS
from commission_engine import ReportAssembler
from commission_engine.spreadsheet import DEFAULT_SHEET, read_invoices, write_report
from commission_engine.errors import OutputPathError, WorkbookError
import io
import os
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)

# Enable CORS for all routes
CORS(app)

# Initialize the report assembler
assembler = ReportAssembler()

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@app.route("/api", methods=["GET"])
def api_info():
    """API information endpoint"""
    return jsonify({
        "status": "ok",
        "message": "Sales Commission Report API",
        "version": "1.0",
        "endpoints": {
            "process_invoices": "/process_invoices [POST]",
            "process_workbook": "/process_workbook [POST]",
            "health": "/health [GET]"
        }
    }), 200


@app.route("/health", methods=["GET"])
def health():
    """Health check for monitoring"""
    return jsonify({"status": "healthy"}), 200


@app.route("/process_invoices", methods=["POST"])
def process_invoices():
    """
    Build the monthly commission report for a JSON list of invoices
    """
    try:
        input_data = request.get_json(force=True, silent=True)

        if not input_data:
            return jsonify({
                "error": "No input data provided",
                "status": "failed"
            }), 400

        invoices = input_data.get("invoices") if isinstance(input_data, dict) else None
        logger.info(f"Processing {len(invoices) if isinstance(invoices, list) else 0} invoices")

        result = assembler.process_from_dict(input_data)

        logger.info(f"Report built: {len(result['months'])} months")

        return jsonify(result), 200

    except (ValueError, KeyError, TypeError) as e:
        # Validation errors from engine (missing fields, bad intervals, etc.)
        logger.error(f"Validation error: {str(e)}")
        return jsonify({
            "error": f"Validation error: {str(e)}",
            "status": "validation_failed"
        }), 400

    except Exception as e:
        # Unexpected errors
        logger.error(f"Processing error: {str(e)}", exc_info=True)
        return jsonify({
            "error": "An unexpected error occurred during processing",
            "status": "failed"
        }), 500


@app.route("/process_workbook", methods=["POST"])
def process_workbook():
    """
    Build the report workbook from an uploaded sales ledger workbook
    """
    upload = request.files.get("file")
    if upload is None:
        return jsonify({
            "error": "No workbook uploaded",
            "status": "failed"
        }), 400

    sheet = request.form.get("sheet", DEFAULT_SHEET)

    try:
        logger.info(f"Processing workbook: {upload.filename} [{sheet}]")
        invoices = read_invoices(io.BytesIO(upload.read()), sheet)
        buckets = assembler.build(invoices)

        report = io.BytesIO()
        write_report(report, buckets)
        report.seek(0)

        logger.info(f"Workbook processed successfully: {upload.filename}")

        return send_file(
            report,
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name="commissions.xlsx"
        )

    except (WorkbookError, ValueError) as e:
        logger.error(f"Validation error: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "validation_failed"
        }), 400

    except OutputPathError as e:
        logger.error(f"Processing error: {str(e)}", exc_info=True)
        return jsonify({
            "error": "Could not build the report workbook",
            "status": "failed"
        }), 500

    except Exception as e:
        # Unexpected errors
        logger.error(f"Processing error: {str(e)}", exc_info=True)
        return jsonify({
            "error": "An unexpected error occurred during processing",
            "status": "failed"
        }), 500


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    app.run(host="0.0.0.0", port=port, debug=False)

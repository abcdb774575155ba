from flask import jsonify
from werkzeug.exceptions import HTTPException
from newsdesk.domain.exceptions import DomainError


def error_response(message, status_code):
    response = jsonify({
        "success": False,
        "message": message
    })
    response.status_code = status_code
    return response


def register_error_handlers(app):
    @app.errorhandler(DomainError)
    def handle_domain_error(error):
        # Message goes out verbatim; clients match on it.
        return error_response(error.message, error.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return error_response(error.description, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        app.logger.exception("Unhandled error: %s", error)
        return error_response("Server error", 500)

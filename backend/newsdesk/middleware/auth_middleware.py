from newsdesk.extensions import db
from newsdesk.errors import error_response
from newsdesk.models.user import User


def register_jwt_callbacks(jwt):
    """
    Shapes every authentication failure as a 401 in the API envelope.
    A missing token is reported distinctly from a bad one.
    """

    @jwt.user_lookup_loader
    def load_user(_jwt_header, jwt_data):
        user = db.session.get(User, jwt_data["sub"])
        if user is None or not user.is_active:
            return None
        return user

    @jwt.user_lookup_error_loader
    def user_not_found(_jwt_header, _jwt_data):
        return error_response("Not authorized, user not found", 401)

    @jwt.unauthorized_loader
    def missing_token(_reason):
        return error_response("Not authorized, no token", 401)

    @jwt.invalid_token_loader
    def invalid_token(_reason):
        return error_response("Not authorized, token failed", 401)

    @jwt.expired_token_loader
    def expired_token(_jwt_header, _jwt_data):
        return error_response("Not authorized, token expired", 401)

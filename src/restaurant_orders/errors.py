class RestaurantOrdersError(Exception):
    """
    Базовая ошибка приложения. status_code уходит в HTTP-ответ.
    """

    status_code = 500
    detail = "Internal error"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.detail)
        if detail:
            self.detail = detail


class SessionUnavailable(RestaurantOrdersError):
    detail = "Session store is unavailable"


class SessionTypeMismatch(RestaurantOrdersError):
    detail = "Session basket slot holds an unexpected value"


class FormDecodeFailure(RestaurantOrdersError):
    detail = "Could not decode submitted form"


class BasketMissing(RestaurantOrdersError):
    status_code = 404
    detail = "No basket in this session"


class IndexOutOfRange(RestaurantOrdersError):
    status_code = 400

    def __init__(self, index: int, length: int):
        super().__init__(f"Order index {index} is out of range for {length} pending orders")
        self.index = index
        self.length = length


class InvalidRestaurantLink(RestaurantOrdersError):
    status_code = 400
    detail = "Invalid restaurant link"


class OrderPersistenceError(RestaurantOrdersError):
    detail = "Could not write order record"


class NotAuthorized(RestaurantOrdersError):
    status_code = 403
    detail = "Restaurant staff only"


class InvalidCredentials(RestaurantOrdersError):
    status_code = 401
    detail = "Invalid username or password"


class UserAlreadyExists(RestaurantOrdersError):
    status_code = 400
    detail = "Username is already taken"


class LoginRequired(RestaurantOrdersError):
    status_code = 302
    detail = "Login required"
    location = "/login"

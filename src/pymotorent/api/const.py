"""Constants for the motorcycle rental API."""

DEFAULT_API_URL = "http://localhost:8000/api/v1"
DEFAULT_API_URI = "/api/v1"
DEFAULT_TIMEOUT_SECONDS = 120.0

USERS_ENDPOINT = "/users"
REGISTER_ENDPOINT = "/users/register"
LOGIN_ENDPOINT = "/users/login"
LOGOUT_ENDPOINT = "/users/logout"
REFRESH_TOKEN_ENDPOINT = "/users/refresh-tokens"
VERIFY_EMAIL_ENDPOINT = "/users/verify-email/{token}"
RESEND_VERIFICATION_ENDPOINT = "/users/resend-email-verification"
FORGOT_PASSWORD_ENDPOINT = "/users/forgot-password"
RESET_PASSWORD_ENDPOINT = "/users/reset-password/{token}"
CHANGE_PASSWORD_ENDPOINT = "/users/change-password"
AVATAR_ENDPOINT = "/users/avatar"
DOCUMENTS_ENDPOINT = "/users/documents"
USER_ENDPOINT = "/users/{user_id}"
ASSIGN_ROLE_ENDPOINT = "/users/assign-role/{user_id}"

MOTORCYCLES_ENDPOINT = "/motorcycles"
MOTORCYCLE_ENDPOINT = "/motorcycles/{motorcycle_id}"
MOTORCYCLE_LOGS_ENDPOINT = "/motorcycles/logs"
MOTORCYCLE_LOG_ENDPOINT = "/motorcycles/logs/{log_id}"
MOTORCYCLE_LOGS_BY_MOTORCYCLE_ENDPOINT = "/motorcycles/logs/{motorcycle_id}"

BOOKINGS_ENDPOINT = "/bookings"
BOOKING_ANALYTICS_ENDPOINT = "/bookings/analytics"
BOOKING_ENDPOINT = "/bookings/{booking_id}"
RAZORPAY_ORDER_ENDPOINT = "/bookings/provider/razorpay"
RAZORPAY_VERIFY_ENDPOINT = "/bookings/provider/razorpay/verify-payment"
PAYPAL_ORDER_ENDPOINT = "/bookings/provider/paypal"
PAYPAL_VERIFY_ENDPOINT = "/bookings/provider/paypal/verify-payment"

REVIEWS_BY_MOTORCYCLE_ENDPOINT = "/reviews/{motorcycle_id}"
REVIEW_ENDPOINT = "/reviews/{review_id}"

COUPONS_ENDPOINT = "/coupons"
COUPON_ENDPOINT = "/coupons/{coupon_id}"
COUPON_STATUS_ENDPOINT = "/coupons/status/{coupon_id}"

CART_ENDPOINT = "/carts"
CART_ITEM_ENDPOINT = "/carts/item/{motorcycle_id}"
CART_CLEAR_ENDPOINT = "/carts/clear"
CART_APPLY_COUPON_ENDPOINT = "/coupons/c/apply"
CART_REMOVE_COUPON_ENDPOINT = "/coupons/c/remove"

# Requests that must never trigger a token refresh.
NO_REFRESH_PATHS = (LOGIN_ENDPOINT, REFRESH_TOKEN_ENDPOINT)

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "pymotorent",
}

"""Well-known HTTP header names, content types and cookie attribute names."""


class ContentTypes:
    APPLICATION_JSON = "application/json"
    FORM = "application/x-www-form-urlencoded"
    MULTIPART = "multipart/form-data"


class CookieAttributes:
    DOMAIN = "Domain"
    EXPIRES = "Expires"
    HTTP_ONLY = "HttpOnly"
    MAX_AGE = "Max-Age"
    PATH = "Path"
    SAME_SITE = "SameSite"
    SECURE = "Secure"


class Headers:
    AUTHORIZATION = "Authorization"
    CONTENT_LENGTH = "Content-Length"
    CONTENT_TYPE = "Content-Type"
    COOKIE = "Cookie"
    DATE = "Date"
    LAST_MODIFIED = "Last-Modified"
    METHOD_OVERRIDE = "X-HTTP-Method-Override"
    PROXY_AUTHORIZATION = "Proxy-Authorization"
    SET_COOKIE = "Set-Cookie"
    USER_AGENT = "User-Agent"

"""
Auth Module - Hosted identity provider (Cognito) integration

Admins sign in through the Cognito hosted UI. The OAuth2 callback trades the
authorization code for tokens, which are kept in HTTP-only cookies; every
protected API call verifies the access token against the pool's JWKS.
"""

from collections import namedtuple
from urllib.parse import urlencode

import jwt
import requests
from flask import current_app, g, request

from extensions import login_manager
from .errors import ApiError, ErrorCodes


ACCESS_TOKEN_COOKIE = 'access_token'
ID_TOKEN_COOKIE = 'id_token'
REFRESH_TOKEN_COOKIE = 'refresh_token'
AUTH_COOKIES = (ACCESS_TOKEN_COOKIE, ID_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE)

TOKEN_REQUEST_TIMEOUT = 10

_jwks_clients = {}


class AuthUser(namedtuple('AuthUser', ['email', 'sub'])):
    """Authenticated admin, as exposed to Flask-Login"""

    is_authenticated = True
    is_active = True
    is_anonymous = False

    def get_id(self):
        return self.sub


def cognito_issuer():
    cfg = current_app.config
    return f"https://cognito-idp.{cfg['COGNITO_REGION']}.amazonaws.com/{cfg['COGNITO_USER_POOL_ID']}"


def cognito_jwks_uri():
    # Cognito hosts the pool's public signing keys here
    return f"{cognito_issuer()}/.well-known/jwks.json"


def _get_jwks_client():
    uri = cognito_jwks_uri()
    client = _jwks_clients.get(uri)
    if client is None:
        client = jwt.PyJWKClient(uri, cache_keys=True)
        _jwks_clients[uri] = client
    return client


def verify_jwt(token):
    """Verify a Cognito access or ID token and return its claims.

    Raises ``jwt.PyJWTError`` (or a subclass) when the token is invalid.
    """
    signing_key = _get_jwks_client().get_signing_key_from_jwt(token)
    claims = jwt.decode(
        token,
        signing_key.key,
        algorithms=['RS256'],
        issuer=cognito_issuer(),
        options={'verify_aud': False, 'require': ['exp', 'iss', 'sub']},
    )

    client_id = current_app.config['COGNITO_CLIENT_ID']
    token_use = claims.get('token_use')
    if token_use == 'access':
        if claims.get('client_id') != client_id:
            raise jwt.InvalidAudienceError('Token was not issued for this client')
    elif token_use == 'id':
        if claims.get('aud') != client_id:
            raise jwt.InvalidAudienceError('Token was not issued for this client')
    else:
        raise jwt.InvalidTokenError(f"Unexpected token_use: {token_use}")
    return claims


def _token_request(payload):
    cfg = current_app.config
    response = requests.post(
        f"https://{cfg['COGNITO_DOMAIN']}/oauth2/token",
        data=payload,
        auth=(cfg['COGNITO_CLIENT_ID'], cfg['COGNITO_CLIENT_SECRET']),
        headers={'Content-Type': 'application/x-www-form-urlencoded'},
        timeout=TOKEN_REQUEST_TIMEOUT,
    )
    response.raise_for_status()
    return response.json()


def exchange_code_for_tokens(code, redirect_uri):
    """Trade an authorization code for access, ID and refresh tokens"""
    return _token_request({
        'grant_type': 'authorization_code',
        'client_id': current_app.config['COGNITO_CLIENT_ID'],
        'code': code,
        'redirect_uri': redirect_uri,
    })


def refresh_access_token(refresh_token):
    """Get fresh access and ID tokens (Cognito does not rotate the refresh token)"""
    return _token_request({
        'grant_type': 'refresh_token',
        'client_id': current_app.config['COGNITO_CLIENT_ID'],
        'refresh_token': refresh_token,
    })


def build_login_url(redirect_uri):
    cfg = current_app.config
    query = urlencode({
        'client_id': cfg['COGNITO_CLIENT_ID'],
        'response_type': 'code',
        'scope': 'openid email profile',
        'redirect_uri': redirect_uri,
    })
    return f"https://{cfg['COGNITO_DOMAIN']}/login?{query}"


def build_logout_url(logout_uri):
    cfg = current_app.config
    query = urlencode({'client_id': cfg['COGNITO_CLIENT_ID'], 'logout_uri': logout_uri})
    return f"https://{cfg['COGNITO_DOMAIN']}/logout?{query}"


def public_base_url():
    """Public-facing origin of the current request, honouring proxy headers"""
    protocol = request.headers.get('X-Forwarded-Proto', 'https')
    host = request.headers.get('X-Forwarded-Host') or request.headers.get('Host') or request.host
    return f"{protocol}://{host}"


def _user_from_claims(claims):
    return AuthUser(email=claims.get('email') or claims.get('username'), sub=claims.get('sub'))


def require_auth():
    """Return the signed-in admin, or raise a 401 ApiError"""
    if 'auth_user' in g and g.auth_user is not None:
        return g.auth_user

    token = request.cookies.get(ACCESS_TOKEN_COOKIE)
    if not token:
        raise ApiError('Not authenticated', 401, ErrorCodes.UNAUTHORIZED)

    try:
        claims = verify_jwt(token)
    except Exception as e:
        current_app.logger.info(f"Rejected access token: {str(e)}")
        raise ApiError('Invalid or expired token', 401, ErrorCodes.UNAUTHORIZED)

    g.auth_user = _user_from_claims(claims)
    return g.auth_user


def optional_auth():
    """Return the signed-in admin or None; never raises"""
    try:
        return require_auth()
    except ApiError:
        return None


def set_auth_cookie(response, name, value, max_age):
    response.set_cookie(
        name,
        value,
        max_age=max_age,
        path='/',
        httponly=True,
        secure=current_app.config.get('AUTH_COOKIE_SECURE', False),
        samesite='Lax',
    )


def clear_auth_cookies(response):
    for name in AUTH_COOKIES:
        set_auth_cookie(response, name, '', 0)


@login_manager.request_loader
def load_user_from_request(req):
    """Resolve ``current_user`` from the access token cookie"""
    return optional_auth()


__all__ = [
    'AuthUser',
    'ACCESS_TOKEN_COOKIE',
    'ID_TOKEN_COOKIE',
    'REFRESH_TOKEN_COOKIE',
    'verify_jwt',
    'exchange_code_for_tokens',
    'refresh_access_token',
    'build_login_url',
    'build_logout_url',
    'public_base_url',
    'require_auth',
    'optional_auth',
    'set_auth_cookie',
    'clear_auth_cookies',
]

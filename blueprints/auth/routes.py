"""
Auth Routes - Authentication and authorization
"""

from urllib.parse import quote
from flask import render_template, redirect, request, jsonify, current_app
from utils.auth import (
    ACCESS_TOKEN_COOKIE, ID_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE,
    build_login_url, build_logout_url, clear_auth_cookies, exchange_code_for_tokens,
    optional_auth, public_base_url, refresh_access_token, require_auth,
    set_auth_cookie, verify_jwt
)
from utils.errors import error_response, ErrorCodes
from . import auth_bp


LOGIN_ERRORS = {
    'auth_failed': 'Authentication failed. Please try again.',
    'no_code': 'No authorization code was returned. Please try again.',
}


def _callback_url():
    return f"{public_base_url()}/api/auth/callback"


def _set_session_cookies(response, tokens):
    expires_in = int(tokens.get('expires_in') or 3600)
    set_auth_cookie(response, ACCESS_TOKEN_COOKIE, tokens['access_token'], expires_in)
    set_auth_cookie(response, ID_TOKEN_COOKIE, tokens['id_token'], expires_in)


@auth_bp.route('/admin/login')
def login():
    """Admin sign-in page"""
    if optional_auth() is not None:
        return redirect('/admin')

    error = request.args.get('error')
    error_message = None
    if error:
        error_message = LOGIN_ERRORS.get(error, f"Login error: {error}")

    return render_template('admin/login.html',
                           login_url=build_login_url(_callback_url()),
                           error_message=error_message)


@auth_bp.route('/admin/logout')
def logout():
    """Clear the session cookies and sign out of the hosted UI"""
    login_page = f"{public_base_url()}/admin/login"
    if current_app.config.get('COGNITO_DOMAIN'):
        response = redirect(build_logout_url(login_page))
    else:
        response = redirect(login_page)
    clear_auth_cookies(response)
    return response


@auth_bp.route('/api/auth/callback')
def callback():
    """OAuth2 authorization-code callback from the hosted UI"""
    base_url = public_base_url()
    current_app.logger.debug(f"Auth callback: host={request.host}, computed base URL={base_url}")

    error = request.args.get('error')
    if error:
        return redirect(f"{base_url}/admin/login?error={quote(error)}")

    code = request.args.get('code')
    if not code:
        return redirect(f"{base_url}/admin/login?error=no_code")

    try:
        tokens = exchange_code_for_tokens(code, f"{base_url}/api/auth/callback")
        claims = verify_jwt(tokens['id_token'])
    except Exception as e:
        current_app.logger.error(f"✗ Auth callback error: {str(e)}")
        return redirect(f"{base_url}/admin/login?error=auth_failed")

    response = redirect(f"{base_url}/admin")
    _set_session_cookies(response, tokens)
    if tokens.get('refresh_token'):
        set_auth_cookie(response, REFRESH_TOKEN_COOKIE, tokens['refresh_token'],
                        current_app.config['REFRESH_TOKEN_MAX_AGE'])

    current_app.logger.info(f"✓ Admin signed in: {claims.get('email') or claims.get('sub')}")
    return response


@auth_bp.route('/api/auth/me')
def me():
    user = require_auth()
    return jsonify({'data': {'email': user.email, 'sub': user.sub}})


@auth_bp.route('/api/auth/refresh', methods=['POST'])
def refresh():
    refresh_token = request.cookies.get(REFRESH_TOKEN_COOKIE)
    if not refresh_token:
        return error_response('No refresh token', 401, ErrorCodes.UNAUTHORIZED)

    try:
        tokens = refresh_access_token(refresh_token)
        response = jsonify({'data': {'success': True}})
        _set_session_cookies(response, tokens)
    except Exception as e:
        current_app.logger.info(f"Token refresh failed: {str(e)}")
        return error_response('Token refresh failed', 401, ErrorCodes.UNAUTHORIZED)

    return response


@auth_bp.route('/api/auth/signout', methods=['POST'])
def signout():
    response = jsonify({'data': {'success': True}})
    clear_auth_cookies(response)
    return response

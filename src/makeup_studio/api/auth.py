"""Sign-in, registration and OAuth callback endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from makeup_studio.api.deps import (
    clear_oauth_verifier_cookie,
    clear_session_cookie,
    get_container,
    oauth_verifier,
    session_token,
    set_oauth_verifier_cookie,
    set_session_cookie,
)
from makeup_studio.api.request_models import (
    LoginRequest,
    OAuthRegistrationRequest,
    RegisterRequest,
)
from makeup_studio.domain.forms import Banner
from makeup_studio.services.auth import ADMIN_PATH, LOGIN_PATH

router = APIRouter(tags=["auth"])


@router.get(LOGIN_PATH, response_class=HTMLResponse)
async def login_page() -> HTMLResponse:
    """Minimal login and registration page."""
    return HTMLResponse(_LOGIN_HTML)


@router.post("/auth/login")
async def login(payload: LoginRequest, request: Request) -> JSONResponse:
    """Sign in with email and password; only admins keep a session."""
    container = get_container(request)
    session = container.auth_gate.sign_in(payload.email, payload.password)
    response = JSONResponse({"status": "ok", "redirect": ADMIN_PATH})
    set_session_cookie(response, container.settings, session.access_token)
    return response


@router.post("/auth/register", status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, request: Request) -> dict[str, object]:
    """Create an admin account gated by the registration secret."""
    container = get_container(request)
    admin = container.auth_gate.register(
        payload.email, payload.password, payload.secret
    )
    return {
        "status": "ok",
        "email": admin.email,
        "banner": Banner.success(
            "Registration successful! Please check your email to confirm your "
            "account, then sign in."
        ).as_dict(),
    }


@router.get("/auth/oauth/{provider}")
async def oauth_start(
    provider: str, request: Request, registration: bool = False
) -> RedirectResponse:
    """Send the browser to the OAuth provider."""
    container = get_container(request)
    start = container.auth_gate.oauth_start(provider, registration)
    response = RedirectResponse(start.url, status_code=status.HTTP_303_SEE_OTHER)
    if start.code_verifier:
        set_oauth_verifier_cookie(response, container.settings, start.code_verifier)
    return response


@router.get("/auth/callback")
async def oauth_callback(
    request: Request,
    code: str | None = None,
    next_path: str | None = Query(default=None, alias="next"),
    google_registration: bool = False,
) -> RedirectResponse:
    """Finish an OAuth sign-in and route the browser."""
    container = get_container(request)
    outcome = container.auth_gate.complete_oauth(
        code, google_registration, next_path, oauth_verifier(request)
    )
    response = RedirectResponse(
        outcome.location, status_code=status.HTTP_303_SEE_OTHER
    )
    clear_oauth_verifier_cookie(response, container.settings)
    if outcome.session is not None:
        set_session_cookie(
            response, container.settings, outcome.session.access_token
        )
    else:
        clear_session_cookie(response, container.settings)
    return response


@router.post("/auth/register/oauth", status_code=status.HTTP_201_CREATED)
async def register_oauth_identity(
    payload: OAuthRegistrationRequest, request: Request
) -> dict[str, object]:
    """Register the OAuth identity held in the session cookie as an admin."""
    container = get_container(request)
    admin = container.auth_gate.register_current_identity(
        session_token(request), payload.secret
    )
    return {
        "status": "ok",
        "email": admin.email,
        "redirect": ADMIN_PATH,
        "banner": Banner.success("Admin registration complete!").as_dict(),
    }


@router.post("/auth/logout")
async def logout(request: Request) -> JSONResponse:
    """Sign out and drop the session cookie."""
    container = get_container(request)
    container.auth_gate.sign_out(session_token(request))
    response = JSONResponse({"status": "ok", "redirect": LOGIN_PATH})
    clear_session_cookie(response, container.settings)
    return response


_LOGIN_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Admin Login</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      .row { margin-bottom: 1rem; }
      input { padding: 0.4rem 0.6rem; width: 320px; }
      button { padding: 0.4rem 0.8rem; margin-right: 0.5rem; }
      #banner { min-height: 1.5rem; }
      .error { color: #b00020; }
      .success { color: #1b5e20; }
    </style>
  </head>
  <body>
    <h1>Admin Login</h1>
    <div id="banner"></div>
    <div class="row">
      <input id="email" type="email" placeholder="Email" /><br />
      <input id="password" type="password" placeholder="Password" />
    </div>
    <div class="row" id="secret-row">
      <input id="secret" type="password" placeholder="Admin secret key (registration)" />
    </div>
    <div class="row">
      <button onclick="signIn()">Sign in</button>
      <button onclick="register()">Register</button>
      <button onclick="location.href='/auth/oauth/google'">Sign in with Google</button>
      <button onclick="location.href='/auth/oauth/google?registration=true'">
        Register with Google
      </button>
    </div>
    <script>
      const params = new URLSearchParams(location.search);
      const messages = {
        unauthorized: 'Access denied. You are not authorized to access the admin panel.',
        auth_failed: 'Authentication failed. Please try again.'
      };
      function show(banner) {
        const el = document.getElementById('banner');
        el.className = banner.type;
        el.textContent = banner.text;
        setTimeout(() => { el.textContent = ''; }, banner.dismiss_after_ms);
      }
      if (params.get('error')) {
        show({ type: 'error', text: 'Error: ' + (messages[params.get('error')] || params.get('error')), dismiss_after_ms: 3000 });
      }
      async function post(path, body) {
        const res = await fetch(path, {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify(body)
        });
        const data = await res.json();
        if (data.banner) show(data.banner);
        if (res.ok && data.redirect) location.href = data.redirect;
      }
      function credentials() {
        return {
          email: document.getElementById('email').value,
          password: document.getElementById('password').value
        };
      }
      function signIn() { post('/auth/login', credentials()); }
      function register() {
        const secret = document.getElementById('secret').value;
        if (params.get('google_registration') === 'true') {
          post('/auth/register/oauth', { secret });
        } else {
          post('/auth/register', { ...credentials(), secret });
        }
      }
    </script>
  </body>
</html>
"""

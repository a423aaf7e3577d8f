"""
HTTP routes for the hotel backend.

Route functions stay thin: they resolve the store and the current actor from
the request, then hand off to a handler.
"""

import html
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Form, Request, Response
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse

from auth import SessionManager, require_authenticated
from database import Store
from errors import InvalidBody, Unauthenticated, ValidationFailed
from handlers import BookingHandler, ContactHandler
from schemas import Actor, LoginRequest

logger = logging.getLogger(__name__)

api = APIRouter(prefix="/api")
admin = APIRouter(prefix="/admin")
pages = APIRouter()


# ---------------- Dependencies ----------------
def get_store(request: Request) -> Store:
    return request.app.state.store


def get_sessions(request: Request, store: Store = Depends(get_store)) -> SessionManager:
    return SessionManager(store, request.app.state.settings.session_ttl_seconds)


def current_actor(request: Request, sessions: SessionManager = Depends(get_sessions)) -> Optional[Actor]:
    token = request.cookies.get(request.app.state.settings.session_cookie_name)
    return sessions.resolve(token)


def require_actor(actor: Optional[Actor] = Depends(current_actor)) -> Actor:
    return require_authenticated(actor)


async def json_object(request: Request, actor: Actor = Depends(require_actor)) -> Dict[str, Any]:
    """
    Request body of a write route, read only once the session has passed
    the gate. Anything but a JSON object is rejected.
    """
    try:
        payload = await request.json()
    except ValueError:
        raise InvalidBody()
    if not isinstance(payload, dict):
        raise InvalidBody()
    return payload


def get_contacts(store: Store = Depends(get_store)) -> ContactHandler:
    return ContactHandler(store)


def get_bookings(request: Request, store: Store = Depends(get_store)) -> BookingHandler:
    return BookingHandler(store, today=getattr(request.app.state, "today", None))


# ---------------- Contacts ----------------
@api.get("/contacts")
def list_contacts(request: Request, handler: ContactHandler = Depends(get_contacts)):
    return handler.list(request.query_params)


@api.get("/contacts/{contact_id}")
def get_contact(contact_id: str, handler: ContactHandler = Depends(get_contacts)):
    return handler.get(contact_id)


@api.post("/contacts", status_code=201)
def create_contact(
    payload: Dict[str, Any] = Depends(json_object),
    handler: ContactHandler = Depends(get_contacts),
    actor: Actor = Depends(require_actor),
):
    return handler.create(payload, actor)


@api.put("/contacts/{contact_id}")
def update_contact(
    contact_id: str,
    payload: Dict[str, Any] = Depends(json_object),
    handler: ContactHandler = Depends(get_contacts),
    actor: Actor = Depends(require_actor),
):
    return handler.update(contact_id, payload, actor)


@api.delete("/contacts/{contact_id}")
def delete_contact(
    contact_id: str,
    handler: ContactHandler = Depends(get_contacts),
    actor: Actor = Depends(require_actor),
):
    return handler.delete(contact_id, actor)


# ---------------- Bookings ----------------
@api.get("/bookings")
def list_bookings(request: Request, handler: BookingHandler = Depends(get_bookings)):
    return handler.list(request.query_params)


@api.get("/bookings/{booking_id}")
def get_booking(booking_id: str, handler: BookingHandler = Depends(get_bookings)):
    return handler.get(booking_id)


@api.post("/bookings", status_code=201)
def create_booking(
    payload: Dict[str, Any] = Depends(json_object),
    handler: BookingHandler = Depends(get_bookings),
    actor: Actor = Depends(require_actor),
):
    return handler.create(payload, actor)


@api.put("/bookings/{booking_id}")
def update_booking(
    booking_id: str,
    payload: Dict[str, Any] = Depends(json_object),
    handler: BookingHandler = Depends(get_bookings),
    actor: Actor = Depends(require_actor),
):
    return handler.update(booking_id, payload, actor)


@api.delete("/bookings/{booking_id}")
def delete_booking(
    booking_id: str,
    handler: BookingHandler = Depends(get_bookings),
    actor: Actor = Depends(require_actor),
):
    return handler.delete(booking_id, actor)


# ---------------- Auth ----------------
@api.get("/auth/status")
def auth_status(actor: Optional[Actor] = Depends(current_actor)):
    if actor is None:
        return {"authenticated": False, "user": None}
    return {"authenticated": True, "user": actor.model_dump(by_alias=True)}


@admin.post("/login")
def login(
    credentials: LoginRequest,
    request: Request,
    response: Response,
    sessions: SessionManager = Depends(get_sessions),
):
    session = sessions.login(credentials.username, credentials.password)
    settings = request.app.state.settings
    response.set_cookie(
        settings.session_cookie_name,
        session.token,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )
    return {"message": "Login successful", "user": session.user.model_dump(by_alias=True)}


@admin.post("/logout")
def logout(
    request: Request,
    response: Response,
    sessions: SessionManager = Depends(get_sessions),
    actor: Optional[Actor] = Depends(current_actor),
):
    settings = request.app.state.settings
    sessions.logout(request.cookies.get(settings.session_cookie_name))
    response.delete_cookie(settings.session_cookie_name, httponly=True, samesite="lax", secure=settings.cookie_secure)
    if actor is not None:
        logger.info(f"User '{actor.username}' logged out")
    return {"message": "Logged out"}


@admin.get("/dashboard", response_class=HTMLResponse)
def dashboard(actor: Optional[Actor] = Depends(current_actor)):
    try:
        actor = require_authenticated(actor)
    except Unauthenticated:
        return RedirectResponse("/admin?error=Please login first", status_code=303)
    name = html.escape(actor.full_name or actor.username)
    return f"<h1>Welcome, {name}</h1><p>Role: {html.escape(actor.role)}</p>"


# ---------------- Public pages ----------------
@pages.post("/contact", response_class=HTMLResponse)
def submit_contact(
    name: str = Form(""),
    email: str = Form(""),
    message: str = Form(""),
    handler: ContactHandler = Depends(get_contacts),
):
    try:
        handler.submit({"name": name, "email": email, "message": message})
    except ValidationFailed as exc:
        return PlainTextResponse(exc.reason, status_code=400)
    return f'<h2>Thanks, {html.escape(name.strip())}! Your message has been saved.</h2><a href="/">Back</a>'

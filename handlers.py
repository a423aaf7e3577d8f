"""
Resource handlers for contacts and bookings.

A handler composes the authorization gate, the validation rules, the query
builder and the store. It performs at most one mutating store call per
operation and every failure is raised before that call.
"""

import logging
from datetime import date, datetime, time
from typing import Any, Dict, List, Mapping, Optional

from pymongo import DESCENDING

import validation as rules
from auth import require_authenticated
from database import BOOKINGS, CONTACTS, Store, now_utc, to_object_id, to_str_id
from errors import NotFound
from query import build_query
from schemas import Actor, Booking, Contact, Record

logger = logging.getLogger(__name__)


class ResourceHandler:
    collection: str = ""
    label: str = ""
    filterable: tuple = ()
    default_sort: tuple = ("created_at", DESCENDING)

    def __init__(self, store: Store):
        self.store = store

    def build_record(self, payload: Dict[str, Any], actor: Optional[Actor], creating: bool) -> Record:
        raise NotImplementedError

    def list(self, params: Mapping[str, str]) -> List[Dict[str, Any]]:
        spec = build_query(params, self.filterable, self.default_sort)
        docs = self.store.find(self.collection, spec.filter, spec.sort, spec.projection)
        return [to_str_id(d) for d in docs]

    def get(self, item_id: str) -> Dict[str, Any]:
        oid = to_object_id(item_id)
        doc = self.store.find_by_id(self.collection, oid)
        if doc is None:
            raise NotFound(f"{self.label} not found")
        return to_str_id(doc)

    def create(self, payload: Dict[str, Any], actor: Optional[Actor]) -> Dict[str, str]:
        actor = require_authenticated(actor)
        record = self.build_record(payload, actor, creating=True)
        return self._insert(record)

    def update(self, item_id: str, payload: Dict[str, Any], actor: Optional[Actor]) -> Dict[str, Any]:
        actor = require_authenticated(actor)
        oid = to_object_id(item_id)
        record = self.build_record(payload, actor, creating=False)
        matched = self.store.update_by_id(self.collection, oid, record.to_document())
        if matched == 0:
            raise NotFound(f"{self.label} not found")
        logger.info(f"{self.label} {item_id} updated by '{actor.username}'")
        return self.get(item_id)

    def delete(self, item_id: str, actor: Optional[Actor]) -> Dict[str, str]:
        actor = require_authenticated(actor)
        oid = to_object_id(item_id)
        if self.store.delete_by_id(self.collection, oid) == 0:
            raise NotFound(f"{self.label} not found")
        logger.info(f"{self.label} {item_id} deleted by '{actor.username}'")
        return {"message": f"{self.label} deleted successfully"}

    def _insert(self, record: Record) -> Dict[str, str]:
        new_id = self.store.insert(self.collection, record.to_document())
        logger.info(f"{self.label} {new_id} created")
        return {"id": new_id}

    @staticmethod
    def stamp(fields: Dict[str, Any], actor: Optional[Actor], creating: bool) -> Dict[str, Any]:
        prefix = "created" if creating else "updated"
        fields[f"{prefix}_at"] = now_utc()
        if actor is not None:
            fields[f"{prefix}_by"] = actor.username
        return fields


class ContactHandler(ResourceHandler):
    collection = CONTACTS
    label = "Contact"
    filterable = ("email", "name")
    default_sort = ("created_at", DESCENDING)
    required = ("name", "email", "message")

    def build_record(self, payload: Dict[str, Any], actor: Optional[Actor], creating: bool) -> Contact:
        rules.require_fields(payload, self.required)
        fields = {
            "name": rules.validate_name(payload.get("name")),
            "email": rules.validate_email(payload.get("email")),
            "message": rules.clean_text(payload.get("message"), "message"),
        }
        return Contact(**self.stamp(fields, actor, creating))

    def submit(self, payload: Dict[str, Any]) -> Dict[str, str]:
        """Public contact form submission; no session and no created_by."""
        record = self.build_record(payload, None, creating=True)
        return self._insert(record)


def _midnight(day: date) -> datetime:
    return datetime.combine(day, time.min)


class BookingHandler(ResourceHandler):
    collection = BOOKINGS
    label = "Booking"
    filterable = ("roomName", "guestEmail", "status")
    default_sort = ("checkInDate", DESCENDING)
    required = (
        "roomName",
        "roomType",
        "guestName",
        "guestEmail",
        "checkInDate",
        "checkOutDate",
        "numberOfGuests",
        "totalPrice",
    )

    def __init__(self, store: Store, today=None):
        super().__init__(store)
        self.today = today

    def build_record(self, payload: Dict[str, Any], actor: Optional[Actor], creating: bool) -> Booking:
        rules.require_fields(payload, self.required)
        guest_email = rules.validate_email(payload.get("guestEmail"), "guestEmail")
        guest_phone = rules.validate_phone(payload.get("guestPhone"))
        today = self.today() if self.today else None
        check_in, check_out = rules.validate_dates(payload.get("checkInDate"), payload.get("checkOutDate"), today)
        guests = rules.validate_guest_count(payload.get("numberOfGuests"))
        price = rules.validate_price(payload.get("totalPrice"))
        status = "pending" if creating else rules.validate_status(payload.get("status"))

        fields = {
            "roomName": rules.clean_text(payload.get("roomName"), "roomName"),
            "roomType": rules.clean_text(payload.get("roomType"), "roomType"),
            "guestName": rules.clean_text(payload.get("guestName"), "guestName"),
            "guestEmail": guest_email,
            "guestPhone": guest_phone,
            "checkInDate": _midnight(check_in),
            "checkOutDate": _midnight(check_out),
            "duration": rules.compute_duration(check_in, check_out),
            "numberOfGuests": guests,
            "totalPrice": price,
            "specialRequests": rules.clean_text(payload.get("specialRequests"), "specialRequests"),
            "status": status,
        }
        return Booking(**self.stamp(fields, actor, creating))

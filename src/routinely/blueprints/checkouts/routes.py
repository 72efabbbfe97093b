"""Checkout log routes (no payment provider behind them)."""

from __future__ import annotations

from flask import jsonify

from ...extensions import get_extension
from ..payload import json_object
from . import bp
from .forms import CheckoutForm


@bp.post("")
def create_checkout():
    form = CheckoutForm.from_mapping(json_object())
    if not form.validate():
        return jsonify({"error": "Invalid checkout", "fields": form.errors}), 400

    repo = get_extension("checkout_repo")
    checkout = repo.create(form.amount, user_id=form.user_id, status=form.status)
    return jsonify(checkout.to_dict()), 201


@bp.get("")
def list_checkouts():
    repo = get_extension("checkout_repo")
    return jsonify([checkout.to_dict() for checkout in repo.list_all()])

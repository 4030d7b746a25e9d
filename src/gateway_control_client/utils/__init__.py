"""Utility helpers."""

from gateway_control_client.utils.idgen import gen_id

__all__ = ["gen_id"]

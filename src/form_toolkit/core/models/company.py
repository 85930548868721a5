"""
Module: company

Purpose:
    Provides CompanySettings - the branding and legal details printed in
    the header and footer of every rendered form.

Key Functions:
    - CompanySettings.from_dict() / to_dict(): Stored-shape conversion
    - CompanySettings.registration_line: Address/contact/VAT/approval line
    - decode_logo(payload): Raw bytes from bytes or a base64 data URL

Dependencies:
    - base64, binascii (std)

Used By:
    - builder.layout.composer: Page header construction
    - storage.json_store
"""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Optional, Union

logger = logging.getLogger(__name__)

LogoPayload = Union[bytes, str]


@dataclass(frozen=True)
class CompanySettings:
    """
    Company information for document chrome (immutable).

    Attributes:
        name: Company name printed top-left
        address: Postal address
        contact: Phone / email line
        vat_number: VAT / company registration number
        approval_number: Regulatory approval number
        legal_text: Footer text printed bottom-left on every page
        logo: Logo image as raw bytes or a base64 (data URL) string
    """

    name: str = ""
    address: str = ""
    contact: str = ""
    vat_number: str = ""
    approval_number: str = ""
    legal_text: str = ""
    logo: Optional[LogoPayload] = None

    @property
    def registration_line(self) -> str:
        """Address, contact and registration numbers joined for the header."""
        parts = [self.address, self.contact]
        if self.vat_number:
            parts.append(f"VAT: {self.vat_number}")
        if self.approval_number:
            parts.append(f"Approval: {self.approval_number}")
        return " | ".join(p for p in parts if p)

    def to_dict(self) -> dict:
        logo = self.logo
        if isinstance(logo, bytes):
            logo = "data:image/png;base64," + base64.b64encode(logo).decode("ascii")
        return {
            "name": self.name,
            "address": self.address,
            "contact": self.contact,
            "vatNumber": self.vat_number,
            "easaNumber": self.approval_number,
            "legalText": self.legal_text,
            "logo": logo,
        }

    @classmethod
    def from_dict(cls, data: dict) -> CompanySettings:
        return cls(
            name=data.get("name") or "",
            address=data.get("address") or "",
            contact=data.get("contact") or "",
            vat_number=data.get("vatNumber") or "",
            approval_number=data.get("easaNumber") or "",
            legal_text=data.get("legalText") or "",
            logo=data.get("logo") or None,
        )


def decode_logo(payload: Optional[LogoPayload]) -> Optional[bytes]:
    """
    Decode a logo payload to raw image bytes.

    Accepts raw bytes, a plain base64 string, or a data URL such as
    "data:image/jpeg;base64,/9j/...".

    Args:
        payload: Stored logo value

    Returns:
        Image bytes, or None when absent or not decodable
    """
    if not payload:
        return None
    if isinstance(payload, bytes):
        return payload
    encoded = payload.split(",", 1)[1] if payload.startswith("data:") else payload
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        logger.warning(f"Company logo is not valid base64: {e}")
        return None

from __future__ import annotations

import logging

from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError
from .model import BusinessCard, CardProfile
from .repository import CardProfileRepository

logger = logging.getLogger(__name__)

# Số máy lẻ dài hơn mức này được coi là số điện thoại đầy đủ.
_MAX_EXTENSION_LENGTH = 6


def office_tel(company_phone: str, extension: str) -> str:
    extension = (extension or "").strip()
    if not extension:
        return company_phone
    if "-" in extension or len(extension) > _MAX_EXTENSION_LENGTH:
        return extension
    return f"{company_phone} # {extension}"


def english_name(profile: CardProfile) -> str:
    return (profile.passport_name or profile.english_name or "").strip()


class BusinessCardService:
    def __init__(self, profiles: CardProfileRepository, *, base_url: str):
        self._profiles = profiles
        self._base_url = base_url.rstrip("/")

    def qr_code(self, company_id: str, employee_no: str) -> str:
        return f"{self._base_url}/{company_id}|{employee_no}"

    def get_card(self, uid: str, cid: str = "") -> BusinessCard:
        uid = require_non_empty(uid, "uid")
        profile = self._profiles.get_profile(uid, (cid or "").strip())
        if profile is None:
            logger.info("business card: employee not found uid=%s cid=%s", uid, cid)
            raise NotFoundError("Employee not found")

        return BusinessCard(
            company=profile.company_name,
            company_id=profile.company_id,
            name=profile.name,
            english_name=english_name(profile),
            title=profile.job_title,
            unit=profile.department_name,
            mail=profile.email,
            tel=office_tel(profile.company_phone, profile.office_tel),
            website=profile.company_website,
            address=profile.company_address,
            qr_code=self.qr_code(profile.company_id, profile.employee_no),
        )

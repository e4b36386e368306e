from __future__ import annotations

from dataclasses import dataclass

from ..auth.model import AuthRequest


@dataclass(frozen=True)
class BusinessCardRequest(AuthRequest):
    pass


@dataclass(frozen=True)
class CardProfile:
    """Nhân viên và công ty ghép lại để in danh thiếp điện tử."""

    employee_no: str
    company_id: str
    name: str
    english_name: str = ""
    passport_name: str = ""
    job_title: str = ""
    department_name: str = ""
    email: str = ""
    office_tel: str = ""
    company_name: str = ""
    company_phone: str = ""
    company_website: str = ""
    company_address: str = ""


@dataclass(frozen=True)
class BusinessCard:
    company: str
    company_id: str
    name: str
    english_name: str
    title: str
    unit: str
    mail: str
    tel: str
    website: str
    address: str
    qr_code: str
    phone: str = ""
    line_id: str = ""
    wechat_id: str = ""

    def to_dict(self) -> dict:
        return {
            "ucompany": self.company,
            "ucompanyid": self.company_id,
            "uname": self.name,
            "uename": self.english_name,
            "utitle": self.title,
            "ucunit": self.unit,
            "umail": self.mail,
            "utel": self.tel,
            "uwebsite": self.website,
            "uaddress": self.address,
            "uphone": self.phone,
            "ulineid": self.line_id,
            "uwechatid": self.wechat_id,
            "uqrcode": self.qr_code,
        }

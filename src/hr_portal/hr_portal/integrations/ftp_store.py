from __future__ import annotations

import logging
import posixpath
import uuid
from ftplib import FTP, all_errors, error_perm
from io import BytesIO
from typing import BinaryIO, Callable, Iterable, Optional

from werkzeug.utils import secure_filename

from ..common.datetime_utils import now_local
from ..core.exceptions import ExternalServiceError, ValidationError
from ..settings import FtpSettings

logger = logging.getLogger(__name__)


def unique_filename(original: str, *, now=None, token: Optional[str] = None) -> str:
    """``{yyyyMMddHHmmss}_{uuid hex}_{safe name}``."""
    safe = secure_filename(original or "") or "file"
    stamp = (now or now_local()).strftime("%Y%m%d%H%M%S")
    return f"{stamp}_{token or uuid.uuid4().hex}_{safe}"


class FtpAttachmentStore:
    """Attachment storage on the company FTP server, one session per call."""

    def __init__(self, settings: FtpSettings, *, ftp_factory: Callable[[], FTP] | None = None):
        self._settings = settings
        self._ftp_factory = ftp_factory or (lambda: FTP(timeout=settings.timeout))

    @property
    def upload_path(self) -> str:
        return "/" + self._settings.upload_path.strip("/") + "/"

    def _open(self) -> FTP:
        s = self._settings
        ftp = self._ftp_factory()
        ftp.connect(s.host, s.port)
        ftp.login(s.username, s.password)
        return ftp

    @staticmethod
    def _ensure_dir(ftp: FTP, remote_dir: str) -> None:
        current = ""
        for part in [p for p in remote_dir.split("/") if p]:
            current = f"{current}/{part}"
            try:
                ftp.mkd(current)
            except error_perm:
                # 550 when it already exists.
                pass

    def _run(self, action: str, fn):
        try:
            with self._open() as ftp:
                return fn(ftp)
        except all_errors as e:
            logger.error("ftp %s failed host=%s: %s", action, self._settings.host, e)
            raise ExternalServiceError(f"FTP {action} 失敗: {e}") from e

    def owner_dir(self, sub_dir: str = "") -> str:
        safe_dir = secure_filename(sub_dir or "")
        return posixpath.join(self.upload_path, safe_dir) if safe_dir else self.upload_path

    def owns(self, remote_path: str, sub_dir: str) -> bool:
        """True when ``remote_path`` sits directly in the ``sub_dir`` upload folder."""
        if not secure_filename(sub_dir or "") or not remote_path:
            return False
        normalized = posixpath.normpath(remote_path)
        return posixpath.dirname(normalized) == self.owner_dir(sub_dir).rstrip("/")

    def upload(self, stream: BinaryIO, filename: str, *, sub_dir: str = "") -> str:
        if not filename:
            raise ValidationError("檔案名稱不可為空")
        remote_dir = self.owner_dir(sub_dir)
        remote_path = posixpath.join(remote_dir, unique_filename(filename))

        def _store(ftp: FTP) -> str:
            self._ensure_dir(ftp, remote_dir)
            ftp.storbinary(f"STOR {remote_path}", stream)
            return remote_path

        path = self._run("upload", _store)
        logger.info("ftp uploaded %s -> %s", filename, path)
        return path

    def upload_many(self, files: Iterable[tuple[BinaryIO, str]], *, sub_dir: str = "") -> list[str]:
        return [self.upload(stream, name, sub_dir=sub_dir) for stream, name in files]

    def download(self, remote_path: str) -> bytes:
        def _retrieve(ftp: FTP) -> bytes:
            buf = BytesIO()
            ftp.retrbinary(f"RETR {remote_path}", buf.write)
            return buf.getvalue()

        return self._run("download", _retrieve)

    def delete(self, remote_path: str) -> None:
        self._run("delete", lambda ftp: ftp.delete(remote_path))

    def list_files(self, remote_dir: str | None = None) -> list[str]:
        def _nlst(ftp: FTP) -> list[str]:
            try:
                return ftp.nlst(remote_dir or self.upload_path)
            except error_perm as e:
                # 550 for a folder with nothing uploaded yet.
                if str(e).startswith("550"):
                    return []
                raise

        return self._run("list", _nlst)

    def exists(self, remote_path: str) -> bool:
        directory, name = posixpath.split(remote_path)
        names = self.list_files(directory or "/")
        return any(posixpath.basename(n) == name for n in names)

    def test_connection(self) -> bool:
        try:
            self._run("connect", lambda ftp: ftp.pwd())
            return True
        except ExternalServiceError:
            return False

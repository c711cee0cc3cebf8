"""Form body parsing: URL-encoded and multipart.

This is the upload collaborator the registration handler relies on.
It yields a multi-value field mapping plus any uploaded files, enforces
the per-file size limit, and refuses bodies it cannot parse. It never
looks at what the fields mean.

``FormData`` implements ``MultiValueMapping`` so the validator reads
checkbox groups and multi-selects with ``get_list``.

Multipart bodies go through ``python-multipart``; URL-encoded bodies use
stdlib ``urllib.parse``.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs

from multipart.multipart import MultipartParser, parse_options_header

from regdesk.errors import BadRequest, PayloadTooLarge


@dataclass(frozen=True, slots=True)
class UploadFile:
    """An uploaded file from a multipart form submission.

    Only the metadata is kept; the bytes are dropped once the part is
    parsed.
    """

    filename: str
    content_type: str
    size: int

    def __repr__(self) -> str:
        return f"UploadFile({self.filename!r}, {self.content_type!r}, {self.size} bytes)"


class FormData(Mapping[str, str]):
    """Immutable parsed form data.

    ``__getitem__`` returns the first value for a key (string fields only).
    ``get_list`` returns all values for a key.
    ``files`` provides access to uploaded files by field name.

    Usage::

        form = await request.form()
        email = form["email"]
        skills = form.get_list("skills")
        photo = form.files.get("photo")  # UploadFile or None
    """

    __slots__ = ("_data", "_files")

    def __init__(
        self,
        data: dict[str, list[str]],
        files: dict[str, UploadFile] | None = None,
    ) -> None:
        object.__setattr__(self, "_data", data)
        object.__setattr__(self, "_files", files or {})

    @property
    def files(self) -> Mapping[str, UploadFile]:
        """Uploaded files by field name."""
        return self._files

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self.get_list(k)!r}" for k in self)
        return f"FormData({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key* (checkboxes, multi-selects)."""
        return list(self._data.get(key, []))


async def parse_form_data(
    body: bytes,
    content_type: str,
    *,
    max_file_size: int | None = None,
) -> FormData:
    """Parse a form body into FormData.

    Supports:
    - ``application/x-www-form-urlencoded``
    - ``multipart/form-data``

    Args:
        body: Raw request body bytes.
        content_type: The Content-Type header value.
        max_file_size: Largest accepted size of a single uploaded file,
            in bytes. ``None`` disables the check.

    Raises:
        BadRequest: If the content type is not a form encoding or the
            multipart body is malformed.
        PayloadTooLarge: If an uploaded file exceeds *max_file_size*.
    """
    ct_lower = content_type.lower().split(";")[0].strip()

    if ct_lower == "application/x-www-form-urlencoded":
        return _parse_urlencoded(body)

    if ct_lower == "multipart/form-data":
        return _parse_multipart(body, content_type, max_file_size)

    raise BadRequest(f"Unsupported form content type: {content_type!r}")


def _parse_urlencoded(body: bytes) -> FormData:
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError:
        raise BadRequest("Form body is not valid UTF-8") from None
    return FormData(parse_qs(text, keep_blank_values=True))


def _parse_multipart(body: bytes, content_type: str, max_file_size: int | None) -> FormData:
    """Parse multipart form data using python-multipart.

    File parts submitted with an empty filename (an untouched file
    input) are dropped.
    """
    _, options = parse_options_header(content_type.encode("latin-1"))
    boundary = options.get(b"boundary")
    if not boundary:
        raise BadRequest("Multipart form data missing boundary parameter")

    data: dict[str, list[str]] = {}
    files: dict[str, UploadFile] = {}

    current_headers: dict[str, str] = {}
    current_data = bytearray()
    current_field_name: str | None = None
    current_filename: str | None = None

    def on_part_begin() -> None:
        nonlocal current_headers, current_data, current_field_name, current_filename
        current_headers = {}
        current_data = bytearray()
        current_field_name = None
        current_filename = None

    def on_part_data(chunk: bytes, start: int, end: int) -> None:
        current_data.extend(chunk[start:end])
        if (
            max_file_size is not None
            and current_filename
            and len(current_data) > max_file_size
        ):
            raise PayloadTooLarge(max_file_size)

    def on_part_end() -> None:
        if current_field_name is None:
            return
        if current_filename is None:
            value = current_data.decode("utf-8", errors="replace")
            data.setdefault(current_field_name, []).append(value)
            return
        if not current_filename:
            return
        files[current_field_name] = UploadFile(
            filename=current_filename,
            content_type=current_headers.get("content-type", "application/octet-stream"),
            size=len(current_data),
        )

    def on_header_field(hdata: bytes, start: int, end: int) -> None:
        current_headers["_pending_field"] = hdata[start:end].decode("latin-1").lower()

    def on_header_value(hdata: bytes, start: int, end: int) -> None:
        nonlocal current_field_name, current_filename
        name = current_headers.pop("_pending_field", "")
        value = hdata[start:end].decode("latin-1")
        current_headers[name] = value

        if name == "content-disposition":
            _, params = parse_options_header(value.encode("latin-1"))
            field_name = params.get(b"name")
            if field_name is not None:
                current_field_name = field_name.decode("utf-8")
            filename = params.get(b"filename")
            if filename is not None:
                current_filename = filename.decode("utf-8")

    callbacks: dict[str, Any] = {
        "on_part_begin": on_part_begin,
        "on_part_data": on_part_data,
        "on_part_end": on_part_end,
        "on_header_field": on_header_field,
        "on_header_value": on_header_value,
    }

    parser = MultipartParser(boundary, callbacks)
    try:
        parser.write(body)
        parser.finalize()
    except PayloadTooLarge:
        raise
    except ValueError as exc:
        # python-multipart's parse errors derive from ValueError
        raise BadRequest(f"Malformed multipart body: {exc}") from exc

    return FormData(data, files)

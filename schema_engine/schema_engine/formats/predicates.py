# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Built-in Draft-07 format predicates.

Each predicate returns ``None`` for a conforming string and raises
``ValueError`` with the reason otherwise.
"""

from __future__ import annotations

import base64
import binascii
import datetime
import ipaddress
import json
import re
from urllib.parse import urlsplit

_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_TIME_RE = re.compile(
    r"^([01]\d|2[0-3]):([0-5]\d):([0-5]\d|60)(\.\d+)?(Z|[+-]([01]\d|2[0-3]):([0-5]\d))$",
    re.IGNORECASE,
)
_DURATION_RE = re.compile(
    r"^P(?!$)(\d+Y)?(\d+M)?(\d+D)?(T(?=\d)(\d+H)?(\d+M)?(\d+S)?)?$|^P\d+W$"
)
_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
_HOSTNAME_LABEL_RE = re.compile(r"^[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?$")
_JSON_POINTER_RE = re.compile(r"^(?:/(?:[^~/]|~[01])*)*$")
_URI_TEMPLATE_RE = re.compile(
    r"^(?:[^{}]|\{[+#./;?&=,!@|]?"
    r"(?:[a-zA-Z0-9_]|%[0-9a-fA-F]{2})+(?::[1-9][0-9]{0,3}|\*)?"
    r"(?:,(?:[a-zA-Z0-9_]|%[0-9a-fA-F]{2})+(?::[1-9][0-9]{0,3}|\*)?)*\})*$"
)
_BASE64_RE = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")
_WHITESPACE_RE = re.compile(r"\s")


def check_date(value: str) -> None:
    m = _DATE_RE.match(value)
    if m is None:
        raise ValueError("Date format does not conform to RFC 3339 full-date")
    try:
        datetime.date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError as exc:
        raise ValueError(f"Invalid date values: {exc}") from exc


def check_time(value: str) -> None:
    if _TIME_RE.match(value) is None:
        raise ValueError("Time format does not conform to RFC 3339 full-time")


def check_date_time(value: str) -> None:
    date_part, sep, time_part = value.partition("T")
    if not sep:
        date_part, sep, time_part = value.partition("t")
    if not sep:
        raise ValueError("Date-time must separate date and time with 'T'")
    check_date(date_part)
    check_time(time_part)


def check_duration(value: str) -> None:
    if _DURATION_RE.match(value) is None:
        raise ValueError("Duration does not conform to ISO 8601")


def check_email(value: str) -> None:
    if _EMAIL_RE.match(value) is None:
        raise ValueError("Invalid email format")


def check_hostname(value: str) -> None:
    host = value[:-1] if value.endswith(".") else value
    if not host or len(host) > 253:
        raise ValueError("Hostname must be between 1 and 253 characters")
    for label in host.split("."):
        if _HOSTNAME_LABEL_RE.match(label) is None:
            raise ValueError(f"Invalid hostname label: {label!r}")


def check_ipv4(value: str) -> None:
    try:
        ipaddress.IPv4Address(value)
    except ipaddress.AddressValueError as exc:
        raise ValueError(str(exc)) from exc


def check_ipv6(value: str) -> None:
    if "%" in value:
        raise ValueError("IPv6 zone identifiers are not allowed")
    try:
        ipaddress.IPv6Address(value)
    except ipaddress.AddressValueError as exc:
        raise ValueError(str(exc)) from exc


def check_uri_reference(value: str) -> None:
    if _WHITESPACE_RE.search(value):
        raise ValueError("URI must not contain whitespace")
    try:
        urlsplit(value)
    except ValueError as exc:
        raise ValueError(f"Invalid URI: {exc}") from exc


def check_uri(value: str) -> None:
    check_uri_reference(value)
    if not urlsplit(value).scheme:
        raise ValueError("URI must be absolute (missing scheme)")


def check_uri_template(value: str) -> None:
    if _URI_TEMPLATE_RE.match(value) is None:
        raise ValueError("Invalid URI template format")


def check_uuid(value: str) -> None:
    if _UUID_RE.match(value) is None:
        raise ValueError("Invalid UUID format")


def check_json_pointer(value: str) -> None:
    if _JSON_POINTER_RE.match(value) is None:
        raise ValueError("JSON Pointer must be empty or '/'-prefixed tokens with ~0/~1 escapes")


def check_regex(value: str) -> None:
    try:
        re.compile(value)
    except re.error as exc:
        raise ValueError(f"Invalid regular expression: {exc}") from exc


def check_json(value: str) -> None:
    try:
        json.loads(value)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON: {exc.msg}") from exc


def decode_base64(value: str) -> bytes:
    """Strict base64 decode (whitespace ignored); raises ``ValueError`` when invalid."""
    clean = _WHITESPACE_RE.sub("", value)
    if len(clean) % 4 != 0 or _BASE64_RE.match(clean) is None:
        raise ValueError("String is not valid base64 encoding")
    try:
        return base64.b64decode(clean, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"String is not valid base64 encoding: {exc}") from exc


BUILTIN_FORMATS = {
    "date-time": check_date_time,
    "date": check_date,
    "time": check_time,
    "duration": check_duration,
    "email": check_email,
    "hostname": check_hostname,
    "ipv4": check_ipv4,
    "ipv6": check_ipv6,
    "uri": check_uri,
    "uri-reference": check_uri_reference,
    "uri-template": check_uri_template,
    "uuid": check_uuid,
    "json-pointer": check_json_pointer,
    "regex": check_regex,
    "json": check_json,
}

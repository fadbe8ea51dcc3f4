# app/core/device.py
import re
from dataclasses import dataclass

from fastapi import Request

_MOBILE_RE = re.compile(r"mobile|android|iphone|ipod|blackberry|opera mini|iemobile|wpdesktop", re.I)
_TABLET_RE = re.compile(r"tablet|ipad|kindle|silk|playbook", re.I)

# Ordered: first match wins. Chrome's UA also says Safari, Edge's says Chrome.
_BROWSERS: list[tuple[str, re.Pattern]] = [
    ("Edge", re.compile(r"edge|edg/", re.I)),
    ("Opera", re.compile(r"opr|opera", re.I)),
    ("Chrome", re.compile(r"chrome", re.I)),
    ("Safari", re.compile(r"safari", re.I)),
    ("Firefox", re.compile(r"firefox", re.I)),
    ("Internet Explorer", re.compile(r"msie|trident", re.I)),
]

_OSES: list[tuple[str, re.Pattern]] = [
    ("Windows", re.compile(r"windows", re.I)),
    ("Android", re.compile(r"android", re.I)),
    ("iOS", re.compile(r"iphone|ipad|ipod", re.I)),
    ("macOS", re.compile(r"macintosh|mac os x", re.I)),
    ("Linux", re.compile(r"linux", re.I)),
]


@dataclass
class DeviceInfo:
    """Metadata stored on a UserDevice row at login/registration."""

    device_type: str
    device_name: str
    user_agent: str
    ip_address: str


def client_ip(request: Request) -> str:
    """
    Client IP behind proxies / load balancers.

    Order: first entry of X-Forwarded-For, then X-Real-IP, then the socket peer.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def device_type(user_agent: str) -> str:
    if _MOBILE_RE.search(user_agent):
        return "mobile"
    if _TABLET_RE.search(user_agent):
        return "tablet"
    return "desktop"


def _first_match(user_agent: str, table: list[tuple[str, re.Pattern]]) -> str:
    for name, pattern in table:
        if pattern.search(user_agent):
            return name
    return "Unknown"


def extract_device_info(request: Request) -> DeviceInfo:
    """
    Build DeviceInfo from request headers.

    device_name reads like "Chrome on macOS".
    """
    user_agent = request.headers.get("user-agent") or "Unknown"
    browser = _first_match(user_agent, _BROWSERS)
    os_name = _first_match(user_agent, _OSES)

    return DeviceInfo(
        device_type=device_type(user_agent),
        device_name=f"{browser} on {os_name}",
        user_agent=user_agent,
        ip_address=client_ip(request)[:45],
    )

"""Host and domain names."""

import logging
import socket
from pathlib import Path

from .base import Resolver

logger = logging.getLogger(__name__)

RESOLV_CONF_PATH = Path("/etc/resolv.conf")


def canonical_name(hostname: str) -> str | None:
    """Return the canonical name DNS reports for ``hostname``.

    Returns None when the lookup fails or gives back the name unchanged.
    """
    try:
        infos = socket.getaddrinfo(
            hostname, None, socket.AF_UNSPEC, socket.SOCK_STREAM, 0, socket.AI_CANONNAME
        )
    except (socket.gaierror, UnicodeError) as e:
        logger.debug("getaddrinfo failed for %s: %s", hostname, e)
        return None

    for _, _, _, canonname, _ in infos:
        if canonname and canonname != hostname:
            return canonname
    return None


def domain_from_resolv_conf(path: Path = RESOLV_CONF_PATH) -> str | None:
    """Return the ``domain`` (or first ``search``) entry of resolv.conf."""
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError:
        return None

    search = None
    for line in lines:
        parts = line.split()
        if len(parts) < 2:
            continue
        if parts[0] == "domain":
            return parts[1]
        if parts[0] == "search" and search is None:
            search = parts[1]
    return search


class HostnameResolver(Resolver):
    """Answers hostname, domain and fqdn."""

    keys = ("hostname", "domain", "fqdn")

    def __init__(self, resolv_conf: Path = RESOLV_CONF_PATH) -> None:
        super().__init__()
        self._resolv_conf = resolv_conf

    @property
    def name(self) -> str:
        return "hostname"

    def _post_resolve(self, key: str) -> None:
        hostname = socket.gethostname()
        if not hostname:
            return

        short, _, domain = hostname.partition(".")
        fqdn = canonical_name(hostname)
        if not domain and fqdn and "." in fqdn:
            domain = fqdn.partition(".")[2]
        if not domain:
            domain = domain_from_resolv_conf(self._resolv_conf) or ""

        if fqdn is None:
            fqdn = f"{short}.{domain}" if domain else short

        self._fact_list.update(hostname=short, domain=domain or None, fqdn=fqdn)

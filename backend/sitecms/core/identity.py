"""
Identity normalization and validation for sites.

Before a site is persisted its identity fields are filled in from one
another, in a fixed order, whenever they were left blank:

    identifier <- parameterized hostname
    hostname   <- identifier
    label      <- titleized identifier
    path       <- cleaned path ("" for the hostname root)

Explicit values are never overwritten, so normalizing twice gives the same
result as normalizing once.
"""
import re
import unicodedata
from typing import Any

IDENTIFIER_RE = re.compile(r"\A\w[a-z0-9_-]*\Z", re.IGNORECASE | re.ASCII)
HOSTNAME_RE = re.compile(r"\A[\w.-]+(?::\d+)?\Z", re.ASCII)

BLANK = "can't be blank"
INVALID = "is invalid"
TAKEN = "has already been taken"


def is_blank(value: Any) -> bool:
    """True for None and for strings holding only whitespace."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def parameterize(text: str, separator: str = "-") -> str:
    """Convert text to a lowercase URL-safe slug."""
    text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    text = re.sub(r"[^a-z0-9\-_]+", separator, text, flags=re.IGNORECASE)
    if separator:
        sep = re.escape(separator)
        text = re.sub(rf"{sep}{{2,}}", separator, text)
        text = re.sub(rf"^{sep}|{sep}$", "", text)
    return text.lower()


def titleize(text: str) -> str:
    """Turn an identifier like ``my_site-name`` into ``My Site Name``."""
    text = re.sub(r"([A-Z\d]+)([A-Z][a-z])", r"\1_\2", text)
    text = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", text)
    words = [w for w in re.split(r"[\s_-]+", text.lower()) if w]
    return " ".join(w[0].upper() + w[1:] for w in words)


def assign_identifier(site) -> None:
    if is_blank(site.identifier):
        site.identifier = parameterize(site.hostname) if site.hostname is not None else None


def assign_hostname(site) -> None:
    if is_blank(site.hostname):
        site.hostname = site.identifier


def assign_label(site) -> None:
    if is_blank(site.label):
        site.label = titleize(site.identifier) if site.identifier is not None else None


def clean_path(site) -> None:
    path = site.path or ""
    path = re.sub(r"/{2,}", "/", path)
    if path.endswith("/"):
        path = path[:-1]
    if path.startswith("/"):
        path = path[1:]
    site.path = path


def normalize(site) -> None:
    """Fill blank identity fields of ``site`` in place."""
    assign_identifier(site)
    assign_hostname(site)
    assign_label(site)
    clean_path(site)


def validate(site) -> dict[str, list[str]]:
    """
    Check presence and format of the identity fields.

    Uniqueness needs the store and is checked by ``SiteService.validate``.
    Returns a mapping of field name to error messages; empty when valid.
    """
    errors: dict[str, list[str]] = {}

    def add(field: str, message: str) -> None:
        errors.setdefault(field, []).append(message)

    if is_blank(site.identifier):
        add("identifier", BLANK)
    elif not IDENTIFIER_RE.match(site.identifier):
        add("identifier", INVALID)

    if is_blank(site.label):
        add("label", BLANK)

    if is_blank(site.hostname):
        add("hostname", BLANK)
    elif not HOSTNAME_RE.match(site.hostname):
        add("hostname", INVALID)

    return errors

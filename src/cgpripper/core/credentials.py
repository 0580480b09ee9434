"""
Access grant derivation.

Exchanges the operator's long-lived ASP.NET session id for the short-lived
CloudFront signed cookies that authorize page asset requests for one book.
"""

from __future__ import annotations

import logging
import random
import string
from dataclasses import dataclass
from typing import Dict, List

import httpx

from .errors import AuthorizationError
from .http_client import ACCESS_URL_TEMPLATE


logger = logging.getLogger(__name__)

SIGNATURE_COOKIE = "CloudFront-Signature"
POLICY_COOKIE = "CloudFront-Policy"
KEY_PAIR_ID_COOKIE = "CloudFront-Key-Pair-Id"
GRANT_COOKIES = (SIGNATURE_COOKIE, POLICY_COOKIE, KEY_PAIR_ID_COOKIE)

ANONYMOUS_USER_GUID = "aaaaaaaa-aaaa-aaaa-aaaa-aaaaaaaaaaa"


@dataclass(frozen=True)
class AccessGrant:
    signature: str = ""
    policy: str = ""
    key_pair_id: str = ""

    def as_cookies(self) -> Dict[str, str]:
        return {
            SIGNATURE_COOKIE: self.signature,
            POLICY_COOKIE: self.policy,
            KEY_PAIR_ID_COOKIE: self.key_pair_id,
        }

    def missing(self) -> List[str]:
        return [name for name, value in self.as_cookies().items() if not value]


def random_signature(length: int = 11) -> str:
    """Per-request form signature; the platform only checks that one is present."""
    alphabet = string.ascii_lowercase + string.digits
    return "".join(random.choices(alphabet, k=length))


def parse_grant_cookies(set_cookies: List[str]) -> AccessGrant:
    """
    Pick the CloudFront cookies out of raw Set-Cookie header values.

    Cookies with other names are ignored. An expected cookie that is absent
    stays an empty string; the resulting grant is then rejected upstream on
    the first asset request rather than here.
    """
    found = {name: "" for name in GRANT_COOKIES}
    for raw in set_cookies:
        pair = raw.split(";", 1)[0].strip()
        name, _, value = pair.partition("=")
        if name in found:
            found[name] = value

    return AccessGrant(
        signature=found[SIGNATURE_COOKIE],
        policy=found[POLICY_COOKIE],
        key_pair_id=found[KEY_PAIR_ID_COOKIE],
    )


async def derive_access_grant(client: httpx.AsyncClient, book_id: str, session_id: str) -> AccessGrant:
    """
    Request a fresh access grant for a book.

    Args:
        client: Client built by http_client.create_client
        book_id: CGP book id
        session_id: ASP.NET_SessionId value from the config file

    Returns:
        The AccessGrant parsed from the response cookies

    Raises:
        AuthorizationError: the response did not set any cookie
        httpx.HTTPError: the request failed
    """
    url = ACCESS_URL_TEMPLATE.format(book_id=book_id)
    logger.info(f"Requesting access grant for book {book_id}")

    response = await client.post(
        url,
        headers={"cookie": f"ASP.Net_SessionId={session_id}"},
        data={
            "UserGuid": ANONYMOUS_USER_GUID,
            "Signature": random_signature(),
        },
        follow_redirects=False,
    )
    if response.is_error:
        response.raise_for_status()

    set_cookies = response.headers.get_list("set-cookie")
    if not set_cookies:
        raise AuthorizationError(
            "Did not get set-cookie from the access endpoint; "
            "the session id is probably invalid or expired. Run 'configure' again."
        )

    grant = parse_grant_cookies(set_cookies)
    missing = grant.missing()
    if missing:
        logger.warning(f"Access grant is missing cookies: {', '.join(missing)}")
    else:
        logger.info(f"Got access grant for book {book_id}")
    return grant

"""Map ``securityDefinitions`` and operation ``security`` requirements."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence, Union

from swagport.models import (
    ApiKeyCredential,
    ApiKeySchemes,
    BasicScheme,
    OAuth2Scheme,
    OAuth2Scope,
    SecuritySchemes,
    SecuritySchemeType,
)

logger = logging.getLogger(__name__)


def scheme_type(definition: Any) -> Optional[SecuritySchemeType]:
    """Return the type of a security definition, or ``None`` if unsupported."""
    if not isinstance(definition, dict):
        return None
    try:
        return SecuritySchemeType(definition.get("type"))
    except ValueError:
        return None


def map_security_definitions(
    definitions: Optional[Mapping[str, Any]],
) -> SecuritySchemes:
    """Group named security definitions by type.

    ``apiKey`` definitions are bucketed by where the key travels (header or
    query string). The canonical model keeps a single ``oauth2`` and a single
    ``basic`` record: when a document defines several, the last one wins.
    Definitions of any other type are ignored.
    """
    header_keys: list[ApiKeyCredential] = []
    query_keys: list[ApiKeyCredential] = []
    oauth2: Optional[OAuth2Scheme] = None
    basic: Optional[BasicScheme] = None

    for name, definition in (definitions or {}).items():
        kind = scheme_type(definition)
        if kind is None:
            logger.debug("Ignoring security definition '%s' of unsupported type", name)
            continue

        if kind is SecuritySchemeType.API_KEY:
            credential = ApiKeyCredential(
                external_name=name,
                name=definition.get("name"),
                description=definition.get("description"),
            )
            if definition.get("in") == "header":
                header_keys.append(credential)
            else:
                query_keys.append(credential)
        elif kind is SecuritySchemeType.OAUTH2:
            scopes = [
                OAuth2Scope(name=scope, value=description)
                for scope, description in (definition.get("scopes") or {}).items()
            ]
            oauth2 = OAuth2Scheme(
                name=name,
                authorization_url=definition.get("authorizationUrl") or "",
                token_url=definition.get("tokenUrl") or "",
                flow=definition.get("flow") or None,
                scopes=scopes or None,
            )
        else:
            basic = BasicScheme(name=name, description=definition.get("description") or "")

    api_key = None
    if header_keys or query_keys:
        api_key = ApiKeySchemes(headers=header_keys, query_string=query_keys)
    return SecuritySchemes(api_key=api_key, oauth2=oauth2, basic=basic)


def map_secured_by(
    requirements: Optional[Sequence[Any]],
    definitions: Optional[Mapping[str, Any]],
) -> dict[str, Union[bool, list[str]]]:
    """Translate an operation's ``security`` requirements.

    Each scheme named by a requirement is looked up in *definitions*;
    ``apiKey`` and ``basic`` schemes map to ``True``, ``oauth2`` to the
    requested scope list. Names without a definition are skipped.

    Returns:
        The secured-by map, or ``{"none": True}`` when nothing matched.
    """
    secured_by: dict[str, Union[bool, list[str]]] = {}
    for requirement in requirements or []:
        if not isinstance(requirement, dict):
            continue
        for scheme_name, scopes in requirement.items():
            kind = scheme_type((definitions or {}).get(scheme_name))
            if kind is None:
                logger.debug(
                    "Security requirement names undefined scheme '%s'; skipped",
                    scheme_name,
                )
                continue
            if kind is SecuritySchemeType.OAUTH2:
                secured_by[kind.value] = list(scopes or [])
            else:
                secured_by[kind.value] = True
    return secured_by or {"none": True}

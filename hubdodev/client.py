"""Hub do Desenvolvedor API client: CNPJ and CEP lookups over HTTPS/JSON.

Every lookup is a single synchronous GET:

    https://ws.hubdodesenvolvedor.com.br/v2/<endpoint>?<params>&token=<token>

The JSON envelope is {"status": bool, "result": {...}, "erro"?: str, "message"?: str}.
A truthy `status` returns `result`; anything else is raised as a HubDoDevError.

One client instance holds one Config and is not safe to reconfigure from
several threads at once. Use one instance per caller.
"""

import json
import logging
import re
import time
from typing import Any, Iterable, List, Mapping, Optional, Union
from urllib.parse import quote_plus

import requests

from .config import Config
from .errors import TransportError, UnknownUpstreamError, UpstreamError
from .models import QueryParam, RequestOptions, ResponseEnvelope

logger = logging.getLogger(__name__)

ParamLike = Union[QueryParam, Mapping[str, Any]]

CNPJ_PATH = "cnpj"
CEP_PATH = "cep3"

CNPJ_UNKNOWN_ERROR = "Ocorreu um erro interno ao tentar consultar o CNPJ"
CEP_UNKNOWN_ERROR = "Ocorreu um erro interno ao tentar consultar o CEP"

_TOKEN_RE = re.compile(r"([?&]token=)[^&\s]*")


def normalize_path(path: str) -> str:
    if not path.startswith("/"):
        path = "/" + path
    return path


def build_query_string(params: Iterable[QueryParam]) -> str:
    """Join sendable params as `?a=1&b=2`; empty string when nothing is sendable."""
    joined = [
        f"{quote_plus(p.name)}={quote_plus(p.value)}"
        for p in params
        if p.sendable
    ]
    if not joined:
        return ""
    return "?" + "&".join(joined)


def build_url(base_url: str, path: str, params: Iterable[QueryParam] = ()) -> str:
    return base_url.rstrip("/") + normalize_path(path) + build_query_string(params)


def _mask_token(url: str) -> str:
    return _TOKEN_RE.sub(r"\1***", url)


def _replace_param(params: Optional[Iterable[ParamLike]], name: str, value: str) -> List[QueryParam]:
    """Drop any caller param called `name`, then append the canonical one last."""
    kept = [QueryParam.coerce(p) for p in (params or [])]
    kept = [p for p in kept if p.name != name]
    kept.append(QueryParam(name=name, value=value))
    return kept


class HubDoDevClient:
    """Client for the Hub do Desenvolvedor lookup API."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_token(self, token: str):
        self.config.token = token

    def set_debug(self, enabled: bool):
        """Toggle transport diagnostics (`info`) on subsequent response envelopes."""
        self.config.debug = enabled

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def consulta_cnpj(self, cnpj: str, params: Optional[Iterable[ParamLike]] = None) -> Any:
        """
        Look up a company registration by CNPJ.

        Args:
            cnpj: CNPJ to look up, formatted or digits only
            params: extra query parameters; any `cnpj` entry is replaced

        Returns:
            the `result` payload of the envelope. When the partner list
            (`quadro_de_socios`) opens with a metadata row carrying
            `informacoes`, that row is dropped.

        Raises:
            UpstreamError, UnknownUpstreamError, TransportError
        """
        envelope = self._get(CNPJ_PATH, _replace_param(params, "cnpj", cnpj))

        if envelope.get("status"):
            result = envelope.get("result")
            if isinstance(result, dict):
                partners = result.get("quadro_de_socios")
                if (isinstance(partners, list) and partners
                        and isinstance(partners[0], dict) and "informacoes" in partners[0]):
                    result["quadro_de_socios"] = partners[1:]
            return result

        self._raise_for_envelope(envelope, CNPJ_UNKNOWN_ERROR)

    def consulta_cep(self, cep: str, params: Optional[Iterable[ParamLike]] = None) -> Any:
        """
        Look up an address by CEP.

        Args:
            cep: CEP to look up
            params: extra query parameters; any `cep` entry is replaced

        Returns:
            the `result` payload of the envelope (address record).

        Raises:
            UpstreamError, UnknownUpstreamError, TransportError
        """
        envelope = self._get(CEP_PATH, _replace_param(params, "cep", cep))

        if envelope.has_field("status") and envelope.get("status"):
            return envelope.get("result")

        self._raise_for_envelope(envelope, CEP_UNKNOWN_ERROR)

    @staticmethod
    def _raise_for_envelope(envelope: ResponseEnvelope, unknown_message: str):
        if envelope.has_field("erro"):
            raise UpstreamError(str(envelope.get("erro")))
        if envelope.has_field("message"):
            raise UpstreamError(str(envelope.get("message")))
        raise UnknownUpstreamError(unknown_message)

    # ------------------------------------------------------------------
    # Request building
    # ------------------------------------------------------------------

    def _default_headers(self) -> List[str]:
        return ["Content-Type: application/json"]

    def _default_query_params(self) -> List[QueryParam]:
        return [QueryParam(name="token", value=self.config.token)]

    def _build_get(self, path: str, params: Optional[Iterable[ParamLike]] = None,
                   headers: Optional[List[str]] = None) -> RequestOptions:
        """Caller params come first, the token last; extra headers follow the defaults."""
        merged_params = [QueryParam.coerce(p) for p in (params or [])]
        merged_params.extend(self._default_query_params())
        return RequestOptions(
            method="GET",
            path=normalize_path(path),
            headers=self._default_headers() + list(headers or []),
            params=merged_params,
        )

    def _get(self, path: str, params: Optional[Iterable[ParamLike]] = None,
             headers: Optional[List[str]] = None) -> ResponseEnvelope:
        return self._execute(self._build_get(path, params, headers))

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _execute(self, options: RequestOptions) -> ResponseEnvelope:
        """
        Perform one request and wrap the answer in a ResponseEnvelope.

        A body that is not valid JSON yields `body=None` instead of raising.
        Network failures (DNS, connect, timeout, redirects) raise TransportError.
        """
        url = build_url(self.config.base_url, options.path, options.params)
        data = json.dumps(options.body) if options.body is not None else None

        t0 = time.time()
        try:
            with requests.Session() as session:
                resp = session.request(
                    options.method,
                    url,
                    headers=options.header_dict(),
                    data=data,
                    timeout=self.config.timeout,
                    allow_redirects=True,
                )
        except requests.RequestException as e:
            reason = _mask_token(str(e))
            logger.warning(f"HubDoDev {options.method} {options.path}: transport error: {reason}")
            raise TransportError(reason) from e
        elapsed = time.time() - t0

        try:
            body = resp.json()
        except ValueError:
            body = None

        logger.debug(
            f"HubDoDev {options.method} {options.path}: HTTP {resp.status_code} "
            f"({int(elapsed * 1000)}ms)"
        )

        envelope = ResponseEnvelope(body=body, http_code=resp.status_code)
        if self.config.debug:
            envelope.info = {
                "method": options.method,
                "request_url": url,
                "url": resp.url or url,
                "http_code": resp.status_code,
                "content_type": resp.headers.get("Content-Type"),
                "total_time": elapsed,
                "redirect_count": len(resp.history),
            }
        return envelope

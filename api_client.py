# api_client.py - minimal HTTP client wrapper around requests
from typing import Any, NamedTuple, Optional, Protocol

import requests

from api_client_utils.logger import get_logger

logger = get_logger("api-client")

JSON_MIME_TYPE = "application/json"
WRONG_STATUS_ERROR_FORMAT = "apiclient: Received non-200 status code from api endpoint: {}"


class APIClientError(Exception):
    pass


class StatusCodeError(APIClientError):
    def __init__(self, status_code):
        self.status_code = status_code
        super().__init__(WRONG_STATUS_ERROR_FORMAT.format(status_code))


class BodyReadError(APIClientError):
    pass


class Response(NamedTuple):
    status_code: int
    body: Optional[Any] = None


class Transport(Protocol):
    def post(self, uri: str, content_type: str, body: Any) -> Response: ...

    def get(self, uri: str) -> Response: ...


class BodyReader(Protocol):
    def read_all(self, stream: Any) -> bytes: ...


class _ResponseBody:
    """Readable view over a streamed requests response; close() releases the response."""

    def __init__(self, resp):
        self._resp = resp
        self._resp.raw.decode_content = True

    def read(self):
        return self._resp.raw.read()

    def close(self):
        self._resp.close()


class RequestsTransport:
    def __init__(self, session=None, timeout=None):
        self.session = session or requests.Session()
        self.timeout = timeout

    def _wrap(self, resp):
        return Response(resp.status_code, _ResponseBody(resp))

    def post(self, uri, content_type, body):
        if isinstance(body, str):
            body = body.encode("utf-8")
        headers = {"Content-Type": content_type}
        resp = self.session.post(uri, data=body, headers=headers, timeout=self.timeout, stream=True)
        return self._wrap(resp)

    def get(self, uri):
        resp = self.session.get(uri, timeout=self.timeout, stream=True)
        return self._wrap(resp)

    def close(self):
        self.session.close()


class DefaultBodyReader:
    def read_all(self, stream):
        data = stream.read()
        return data if data is not None else b""


def _release(stream):
    # close errors never replace the outcome of the call
    try:
        stream.close()
    except Exception as e:
        logger.warning("error closing response body: %s", str(e))


class APIClient:
    def __init__(self, base_url=None, transport=None, body_reader=None, timeout=None):
        self.base_url = base_url.rstrip('/') if base_url else None
        self.transport = transport or RequestsTransport(timeout=timeout)
        self.body_reader = body_reader or DefaultBodyReader()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        """Close the transport, if it holds anything to close."""
        close = getattr(self.transport, "close", None)
        if callable(close):
            close()

    def _url(self, endpoint):
        if not self.base_url or endpoint.startswith(("http://", "https://")):
            return endpoint
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def do_post(self, uri: str, json_body: str) -> str:
        """Send an already serialized JSON message and return the response body as text."""
        return self._do_http(uri, "POST", json_body)

    def do_get(self, uri: str) -> str:
        """Return the response body of an HTTP GET request."""
        return self._do_http(uri, "GET")

    def _do_http(self, uri, method, body=""):
        url = self._url(uri)
        logger.debug("%s %s", method, url)

        try:
            if method == "POST":
                logger.debug("REQ-BODY: %s", body)
                resp = self.transport.post(url, JSON_MIME_TYPE, body)
            elif method == "GET":
                resp = self.transport.get(url)
            else:
                raise ValueError(f"unsupported method: {method}")
        except requests.exceptions.RequestException as e:
            logger.warning("%s %s -> request failed: %s", method, url, str(e))
            raise

        if resp.status_code != 200:
            logger.warning("%s %s -> status %s", method, url, resp.status_code)
            if resp.body is not None:
                _release(resp.body)
            raise StatusCodeError(resp.status_code)

        if resp.body is None:
            return ""

        try:
            data = self.body_reader.read_all(resp.body)
        except Exception as e:
            logger.error("%s %s -> error reading body: %s", method, url, str(e))
            raise BodyReadError(str(e)) from e
        finally:
            _release(resp.body)

        if data is None:
            return ""
        return data.decode("utf-8", errors="replace")

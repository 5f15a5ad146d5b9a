import unittest
from urllib.parse import parse_qs

import httpx
from bs4 import BeautifulSoup
from pydantic import ValidationError

from adapters.http_client import build_async_client, get_document, get_json, post_form, summarize_document
from adapters.http_errors import PayloadError, TransportError
from adapters.http_models import RequestParams
from core.config import AppSettings

USER = {
    "_id": "123ABC",
    "_rev": "946B7D1C",
    "username": "pgte",
    "email": "pedro.teixeira@gmail.com",
}

PAGE = """
<html>
  <head>
    <title> Example page </title>
    <meta name="description" content="A stub page">
    <meta property="og:image" content="/img/cover.png">
  </head>
  <body><ul><li class="item">one</li><li class="item">two</li></ul></body>
</html>
"""


def _settings() -> AppSettings:
    return AppSettings(_env_file=None)


class TestGetJSON(unittest.IsolatedAsyncioTestCase):
    async def test_returns_decoded_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            self.assertEqual(request.url.path, "/users/1")
            return httpx.Response(200, json=USER)

        result = await get_json(
            RequestParams(uri="http://example.com/users/1", json=True),
            settings=_settings(),
            transport=httpx.MockTransport(handler),
        )
        self.assertEqual(result, USER)

    async def test_accepts_plain_mapping_with_query_and_headers(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["query"] = dict(request.url.params)
            seen["token"] = request.headers.get("x-token")
            seen["accept"] = request.headers.get("accept")
            return httpx.Response(200, json=[1, 2, 3])

        result = await get_json(
            {"uri": "http://example.com/items", "qs": {"page": 2}, "headers": {"X-Token": "abc"}, "json": True},
            settings=_settings(),
            transport=httpx.MockTransport(handler),
        )
        self.assertEqual(result, [1, 2, 3])
        self.assertEqual(seen["query"], {"page": "2"})
        self.assertEqual(seen["token"], "abc")
        self.assertEqual(seen["accept"], "application/json")

    async def test_server_error_raises_transport_error(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(500, text="boom"))

        with self.assertRaises(TransportError) as ctx:
            await get_json({"uri": "http://example.com/500", "json": True}, settings=_settings(), transport=transport)

        self.assertEqual(ctx.exception.status_code, 500)
        self.assertEqual(ctx.exception.url, "http://example.com/500")
        self.assertIsInstance(ctx.exception.cause, httpx.HTTPStatusError)
        self.assertIs(ctx.exception.__cause__, ctx.exception.cause)

    async def test_network_failure_raises_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with self.assertRaises(TransportError) as ctx:
            await get_json({"uri": "http://example.com/", "json": True}, transport=httpx.MockTransport(handler))

        self.assertIsNone(ctx.exception.status_code)
        self.assertIsInstance(ctx.exception.cause, httpx.ConnectError)

    async def test_invalid_json_raises_payload_error(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html></html>"))

        with self.assertRaises(PayloadError) as ctx:
            await get_json({"uri": "http://example.com/", "json": True}, settings=_settings(), transport=transport)

        self.assertNotIsInstance(ctx.exception, TransportError)
        self.assertEqual(ctx.exception.status_code, 200)

    async def test_malformed_params_fail_before_any_request(self):
        def handler(request: httpx.Request) -> httpx.Response:
            self.fail("no request expected")

        with self.assertRaises(ValidationError):
            await get_json({"json": True}, transport=httpx.MockTransport(handler))


class TestGetDocument(unittest.IsolatedAsyncioTestCase):
    async def test_returns_document_and_new_jar(self):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, text=PAGE, headers={"Content-Type": "text/html"})
        )

        result = await get_document("http://example.com/", settings=_settings(), transport=transport)

        self.assertIsInstance(result.document, BeautifulSoup)
        self.assertEqual([li.get_text() for li in result.document.select("li.item")], ["one", "two"])
        self.assertIsInstance(result.cookie_jar, httpx.Cookies)
        self.assertEqual(len(result.cookie_jar), 0)

    async def test_same_jar_accumulates_cookies(self):
        seen_cookies = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen_cookies.append(request.headers.get("cookie", ""))
            visits = len(seen_cookies)
            return httpx.Response(
                200,
                text=PAGE,
                headers={"Set-Cookie": f"visit{visits}=yes; Path=/"},
            )

        jar = httpx.Cookies()
        jar.set("session", "abc123", domain="example.com")
        transport = httpx.MockTransport(handler)

        first = await get_document("http://example.com/", jar, settings=_settings(), transport=transport)
        second = await get_document("http://example.com/next", first.cookie_jar, settings=_settings(), transport=transport)

        self.assertIs(first.cookie_jar, jar)
        self.assertIs(second.cookie_jar, jar)
        self.assertIn("session=abc123", seen_cookies[0])
        self.assertIn("session=abc123", seen_cookies[1])
        self.assertIn("visit1=yes", seen_cookies[1])
        self.assertEqual(jar.get("session"), "abc123")
        self.assertEqual(jar.get("visit2"), "yes")

    async def test_not_found_raises_transport_error(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(404, text="missing"))

        with self.assertRaises(TransportError) as ctx:
            await get_document("http://example.com/missing", settings=_settings(), transport=transport)

        self.assertEqual(ctx.exception.status_code, 404)

    async def test_follows_redirects_by_default(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/old":
                return httpx.Response(301, headers={"Location": "http://example.com/new"})
            return httpx.Response(200, text=PAGE)

        result = await get_document("http://example.com/old", settings=_settings(), transport=httpx.MockTransport(handler))
        self.assertEqual(result.document.title.string.strip(), "Example page")


class TestPostForm(unittest.IsolatedAsyncioTestCase):
    async def test_sends_form_and_returns_body_verbatim(self):
        def handler(request: httpx.Request) -> httpx.Response:
            self.assertEqual(request.method, "POST")
            self.assertEqual(request.headers["content-type"], "application/x-www-form-urlencoded")
            self.assertEqual(parse_qs(request.content.decode()), {"user": ["ana"], "remember": ["1"]})
            return httpx.Response(200, text="welcome ana")

        result = await post_form(
            {"uri": "http://example.com/login", "form": {"user": "ana", "remember": "1"}},
            settings=_settings(),
            transport=httpx.MockTransport(handler),
        )
        self.assertEqual(result, "welcome ana")

    async def test_decodes_json_when_requested(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(201, json={"ok": True}))

        result = await post_form(
            RequestParams(uri="http://example.com/api", form={"a": "b"}, json=True),
            settings=_settings(),
            transport=transport,
        )
        self.assertEqual(result, {"ok": True})

    async def test_unreachable_endpoint_raises_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        with self.assertRaises(TransportError):
            await post_form(
                {"uri": "http://unreachable.invalid/", "form": {"a": "b"}},
                settings=_settings(),
                transport=httpx.MockTransport(handler),
            )

    async def test_redirect_is_a_failure_unless_following(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/submit":
                return httpx.Response(302, headers={"Location": "http://example.com/done"})
            return httpx.Response(200, text="done")

        transport = httpx.MockTransport(handler)
        params = {"uri": "http://example.com/submit", "form": {"a": "b"}}

        with self.assertRaises(TransportError) as ctx:
            await post_form(params, settings=_settings(), transport=transport)
        self.assertEqual(ctx.exception.status_code, 302)

        result = await post_form({**params, "followAllRedirects": True}, settings=_settings(), transport=transport)
        self.assertEqual(result, "done")

    async def test_shares_cookie_jar(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="ok", headers={"Set-Cookie": "token=xyz; Path=/"})

        jar = httpx.Cookies()
        await post_form(
            {"uri": "http://example.com/login", "form": {"u": "x"}, "jar": jar},
            settings=_settings(),
            transport=httpx.MockTransport(handler),
        )
        self.assertEqual(jar.get("token"), "xyz")


class TestBuildAsyncClient(unittest.IsolatedAsyncioTestCase):
    async def test_applies_settings(self):
        settings = AppSettings(_env_file=None, user_agent="probe/1.0", http_timeout_seconds=3)
        async with build_async_client(settings, extra_headers={"X-Extra": "1"}) as client:
            self.assertEqual(client.headers["user-agent"], "probe/1.0")
            self.assertEqual(client.headers["x-extra"], "1")
            self.assertEqual(client.timeout.read, 3)

    async def test_binds_caller_jar_by_reference(self):
        jar = httpx.Cookies()
        async with build_async_client(_settings(), cookies=jar) as client:
            self.assertIs(client.cookies.jar, jar.jar)


class TestSummarizeDocument(unittest.TestCase):
    def test_extracts_metadata(self):
        document = BeautifulSoup(PAGE, "html.parser")
        summary = summarize_document(document, base_url="http://example.com/page")
        self.assertEqual(
            summary,
            {
                "title": "Example page",
                "meta_description": "A stub page",
                "og_image": "http://example.com/img/cover.png",
            },
        )

    def test_empty_document(self):
        self.assertEqual(summarize_document(BeautifulSoup("", "html.parser")), {})


if __name__ == "__main__":
    unittest.main()

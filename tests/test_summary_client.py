import json
import unittest

import httpx

from errors import ExtractionError, MalformedResponseError, ServiceError
from summary_client import SummaryClient

RELAY = "http://relay.test"


def client_for(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class SummaryClientTests(unittest.IsolatedAsyncioTestCase):
    async def test_posts_text_and_parses_choices(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["method"] = request.method
            seen["body"] = json.loads(request.content)
            seen["content_type"] = request.headers["content-type"]
            return httpx.Response(200, json={"id": "cmpl-1", "choices": [{"text": "Short.", "index": 0}]})

        async with client_for(handler) as http:
            summary = await SummaryClient(RELAY + "/", client=http).summarize("Long text")

        self.assertEqual(seen["url"], RELAY + "/summarize")
        self.assertEqual(seen["method"], "POST")
        self.assertEqual(seen["body"], {"text": "Long text"})
        self.assertTrue(seen["content_type"].startswith("application/json"))
        self.assertEqual(summary.text, "Short.")
        self.assertEqual(summary.model_dump()["id"], "cmpl-1")

    async def test_non_success_status(self):
        async with client_for(lambda request: httpx.Response(502, text="bad gateway")) as http:
            with self.assertRaises(ServiceError) as ctx:
                await SummaryClient(RELAY, client=http).summarize("x")
        self.assertEqual(ctx.exception.status_code, 502)

    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with client_for(handler) as http:
            with self.assertRaises(ServiceError):
                await SummaryClient(RELAY, client=http).summarize("x")

    async def test_not_json(self):
        async with client_for(lambda request: httpx.Response(200, text="<html>")) as http:
            with self.assertRaises(MalformedResponseError):
                await SummaryClient(RELAY, client=http).summarize("x")

    async def test_wrong_shape(self):
        async with client_for(lambda request: httpx.Response(200, json={"choices": [{"no_text": 1}]})) as http:
            with self.assertRaises(ExtractionError):
                await SummaryClient(RELAY, client=http).summarize("x")

    async def test_no_choices(self):
        async with client_for(lambda request: httpx.Response(200, json={"choices": []})) as http:
            summary = await SummaryClient(RELAY, client=http).summarize("x")
        with self.assertRaises(MalformedResponseError):
            summary.text

from __future__ import annotations

import sys
import unittest
from pathlib import Path

import httpx

PROJECT_ROOT = Path(__file__).resolve().parent.parent
API_CODE_PATH = PROJECT_ROOT / "api-code"
if str(API_CODE_PATH) not in sys.path:
    sys.path.insert(0, str(API_CODE_PATH))

from domain import (
    EmptyCompletionError,
    GatewayError,
    MalformedResponseError,
    RateLimitedError,
    UnauthorizedError,
)
from services.normalizer import normalize_completion


def envelope(content) -> dict:
    return {
        "id": "gen-1",
        "model": "deepseek/deepseek-chat-v3-0324:free",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
    }


class NormalizeCompletionTest(unittest.TestCase):
    def test_extracts_content(self) -> None:
        reply = normalize_completion(httpx.Response(200, json=envelope("Hello")))
        self.assertEqual(reply.role, "assistant")
        self.assertEqual(reply.content, "Hello")

    def test_empty_string_content_is_a_success(self) -> None:
        reply = normalize_completion(httpx.Response(200, json=envelope("")))
        self.assertEqual(reply.content, "")

    def test_unauthorized_carries_gateway_message(self) -> None:
        response = httpx.Response(401, json={"error": {"message": "No auth credentials found", "code": 401}})
        with self.assertRaises(UnauthorizedError) as ctx:
            normalize_completion(response)
        self.assertEqual(ctx.exception.status_code, 401)
        self.assertEqual(ctx.exception.message, "No auth credentials found")
        self.assertEqual(ctx.exception.kind, "unauthorized")

    def test_rate_limited(self) -> None:
        response = httpx.Response(429, json={"message": "slow down"})
        with self.assertRaises(RateLimitedError) as ctx:
            normalize_completion(response)
        self.assertEqual(ctx.exception.message, "slow down")

    def test_other_status_is_gateway_error(self) -> None:
        for status_code in (400, 402, 500, 502, 503):
            with self.subTest(status_code=status_code):
                with self.assertRaises(GatewayError) as ctx:
                    normalize_completion(httpx.Response(status_code, text="upstream exploded"))
                self.assertEqual(ctx.exception.status_code, status_code)
                self.assertEqual(ctx.exception.message, "upstream exploded")

    def test_unauthorized_is_not_a_plain_gateway_error(self) -> None:
        with self.assertRaises(UnauthorizedError) as ctx:
            normalize_completion(httpx.Response(401))
        self.assertNotIsInstance(ctx.exception, GatewayError)

    def test_non_json_body_is_malformed(self) -> None:
        with self.assertRaises(MalformedResponseError):
            normalize_completion(httpx.Response(200, text="<html>oops</html>"))

    def test_non_object_body_is_malformed(self) -> None:
        with self.assertRaises(MalformedResponseError):
            normalize_completion(httpx.Response(200, json=["choices"]))

    def test_wrongly_typed_structure_is_malformed(self) -> None:
        bodies = (
            {"choices": "nope"},
            {"choices": ["nope"]},
            {"choices": [{"message": "text"}]},
            envelope(["a", "list"]),
        )
        for body in bodies:
            with self.subTest(body=body):
                with self.assertRaises(MalformedResponseError):
                    normalize_completion(httpx.Response(200, json=body))

    def test_missing_content_path_is_empty_completion(self) -> None:
        bodies = (
            {},
            {"choices": []},
            {"choices": [{"index": 0}]},
            {"choices": [{"message": {"role": "assistant"}}]},
            envelope(None),
        )
        for body in bodies:
            with self.subTest(body=body):
                with self.assertRaises(EmptyCompletionError):
                    normalize_completion(httpx.Response(200, json=body))


if __name__ == "__main__":
    unittest.main()

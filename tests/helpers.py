"""
Helper functions for tests
"""
import json
from typing import Any, Callable, List, Union

import httpx

Outcome = Union[Callable[[httpx.Request], httpx.Response], Exception]


def json_response(status_code: int, body: Any) -> Callable[[httpx.Request], httpx.Response]:
    """Build a handler outcome answering with a JSON body"""
    def respond(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=body)
    return respond


def text_response(status_code: int, text: str) -> Callable[[httpx.Request], httpx.Response]:
    def respond(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, text=text)
    return respond


def echo_response(request: httpx.Request) -> httpx.Response:
    """Answer with the request body"""
    return httpx.Response(200, content=request.content)


class RecordingHandler:
    """
    httpx.MockTransport handler replaying outcomes in order

    The last outcome is repeated once the others are used up. Exceptions are
    raised as transport errors.
    """

    def __init__(self, outcomes: List[Outcome]):
        self.outcomes = list(outcomes)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome(request)

    @property
    def hosts(self) -> List[str]:
        return [request.url.host for request in self.requests]

    def body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)

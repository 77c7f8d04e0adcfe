"""
Shared fakes for the IMDS transport
"""
import io
import json

import requests

from metadata import TOKEN_URL
from models import MetadataField

TEST_TOKEN = "AQAEAFakeTokenValue=="
TEST_ACCOUNT_ID = "123456789012"


class FakeResponse:
    def __init__(self, body="", status_code=200, read_error=None):
        self.body = body
        self.status_code = status_code
        self.read_error = read_error
        self.closed = False

    @property
    def text(self):
        if self.read_error is not None:
            raise self.read_error
        return self.body

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Client Error", response=self)

    def close(self):
        self.closed = True


class FakeSession:
    """
    Stands in for requests.Session. Routes map (method, url) to a FakeResponse
    or to an exception to raise; unknown routes fail to connect.
    """

    def __init__(self, routes):
        self.routes = dict(routes)
        self.calls = []

    def request(self, method, url, headers=None, timeout=None, stream=False):
        self.calls.append((method, url, dict(headers or {}), timeout))
        route = self.routes.get((method, url))
        if route is None:
            raise requests.exceptions.ConnectionError(f"Failed to connect to {url}")
        if isinstance(route, Exception):
            raise route
        return route

    def urls(self, method):
        return [url for m, url, _, _ in self.calls if m == method]


def imds_routes(**overrides):
    """Routes for a healthy instance; pass FIELD_NAME=None to drop a field."""
    bodies = {
        "INSTANCE_ID": "i-1234567890abcdef0",
        "ACCOUNT_ID": json.dumps({"Code": "Success", "AccountId": TEST_ACCOUNT_ID}),
        "AMI_ID": "ami-0abcdef1234567890",
        "AVAILABILITY_ZONE": "us-east-1a",
        "INSTANCE_TYPE": "t3.micro",
        "HOSTNAME": "ip-10-0-0-12.ec2.internal",
        "LOCAL_HOSTNAME": "ip-10-0-0-12.ec2.internal",
        "PUBLIC_HOSTNAME": "ec2-54-0-0-12.compute-1.amazonaws.com",
    }
    bodies.update(overrides)
    routes = {("PUT", TOKEN_URL): FakeResponse(TEST_TOKEN)}
    for name, body in bodies.items():
        if body is None:
            continue
        if not isinstance(body, (FakeResponse, Exception)):
            body = FakeResponse(body)
        routes[("GET", MetadataField[name].url)] = body
    return routes


class StaticAdapter(requests.adapters.BaseAdapter):
    """
    Transport adapter serving canned bodies through a real requests.Session.
    Routes map (method, url) to (status_code, body); unknown routes are 404s.
    """

    def __init__(self, routes):
        super().__init__()
        self.routes = dict(routes)
        self.sent = []

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.sent.append((request, stream, timeout))
        status_code, body = self.routes.get((request.method, request.url), (404, b"Not Found"))
        response = requests.Response()
        response.status_code = status_code
        response.reason = "OK" if status_code < 400 else "Not Found"
        response.raw = io.BytesIO(body)
        response.encoding = "utf-8"
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass

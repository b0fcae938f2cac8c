"""
BDD step definitions for the user CRUD feature (pytest-bdd).
Challenge: Express the client contract in Gherkin; map steps to HTTP calls.
"""

import pytest
from fastapi.testclient import TestClient
from pytest_bdd import given, parsers, scenarios, then, when

from userapi.main import create_app

# Load all scenarios from the feature file
scenarios("../features/users.feature")


@pytest.fixture
def api(settings):
    """App with its lifespan running against a temporary database."""
    with TestClient(create_app(settings)) as client:
        yield client


@pytest.fixture
def response():
    """Store last response for then steps."""
    return {}


@pytest.fixture
def context():
    return {}


@given("a running user API")
def running_api(api):
    assert api.get("/users").status_code == 200


@given(parsers.parse('a user "{name}" with email "{email}" exists'))
def existing_user(api, context, name, email):
    r = api.post("/users", json={"name": name, "email": email, "password": "secret"})
    assert r.status_code == 200
    context["user_id"] = next(u["id"] for u in api.get("/users").json() if u["email"] == email)


@when(parsers.parse('I create a user "{name}" with email "{email}" and password "{password}"'))
def create_user(api, response, name, email, password):
    r = api.post("/users", json={"name": name, "email": email, "password": password})
    response["status"] = r.status_code
    response["body"] = r.json()


@when(parsers.parse('I request "{method}" "{path}"'))
def request_path(api, response, method, path):
    r = api.request(method, path)
    response["status"] = r.status_code
    response["body"] = r.json()


@when(parsers.parse('I rename that user to "{name}" with email "{email}"'))
def rename_user(api, response, context, name, email):
    r = api.put(f"/users/{context['user_id']}", json={"name": name, "email": email})
    response["status"] = r.status_code
    response["body"] = r.json()


@when("I delete that user")
def delete_user(api, response, context):
    r = api.delete(f"/users/{context['user_id']}")
    response["status"] = r.status_code
    response["body"] = r.json()


@then(parsers.parse("the response status should be {status:d}"))
def status_is(response, status):
    assert response["status"] == status


@then(parsers.parse('the response body should have "{key}" equals "{value}"'))
def body_has(response, key, value):
    assert response["body"].get(key) == value


@then("the response body should be an empty user")
def body_is_empty_user(response):
    assert response["body"] == {"id": 0, "name": "", "email": ""}


@then(parsers.parse('the user list should contain "{name}" with email "{email}"'))
def list_contains(api, name, email):
    users = api.get("/users").json()
    assert any(u["name"] == name and u["email"] == email for u in users)
    assert all("password" not in u for u in users)


@then(parsers.parse('fetching that user returns "{name}" with email "{email}"'))
def fetch_returns(api, context, name, email):
    body = api.get(f"/users/{context['user_id']}").json()
    assert body == {"id": context["user_id"], "name": name, "email": email}


@then("fetching that user returns an empty user")
def fetch_returns_empty(api, context):
    assert api.get(f"/users/{context['user_id']}").json() == {"id": 0, "name": "", "email": ""}

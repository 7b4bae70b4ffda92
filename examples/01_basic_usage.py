"""
Basic Usage Examples

Demonstrates the verb shortcuts and typed helpers.
"""

from src.request_helper import HTTPClient


def basic_get_request():
    """Simple GET request."""
    print("\n=== Basic GET Request ===")

    with HTTPClient(base_url="https://jsonplaceholder.typicode.com") as client:
        response = client.get("/posts/1")

        print(f"Status: {response.status}")
        print(f"Request id: {response.request_id}")
        print(f"Data: {response.data}")


def post_with_json():
    """POST request with a dict body (sent as JSON)."""
    print("\n=== POST with JSON ===")

    with HTTPClient(base_url="https://jsonplaceholder.typicode.com") as client:
        response = client.post("/posts", {"title": "My Post", "body": "content", "userId": 1})
        print(f"Status: {response.status}")
        print(f"Created: {response.data}")


def typed_helpers():
    """Accept / Content-Type set by the helper."""
    print("\n=== Typed helpers ===")

    with HTTPClient(base_url="https://jsonplaceholder.typicode.com") as client:
        user = client.get_json("/users/1").data
        print(f"User: {user['name']}")

        response = client.post_form("/posts", {"title": "form post", "userId": 1})
        print(f"Form POST status: {response.status}")


if __name__ == "__main__":
    basic_get_request()
    post_with_json()
    typed_helpers()

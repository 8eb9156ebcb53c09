"""
Basic Smart HTTP Client Usage Examples

Typed GET, POST with a JSON body, void DELETE and the async dispatcher.
"""

import asyncio
from typing import List, Optional

from pydantic import BaseModel

from src.smart_http import (
    ApiError,
    AsyncHTTPClient,
    HTTPClient,
    HTTPClientConfig,
    HTTPClientRequest,
)

API = "https://jsonplaceholder.typicode.com"


class Post(BaseModel):
    id: Optional[int] = None
    userId: int
    title: str
    body: str = ""


def typed_get():
    """GET into a pydantic model."""
    print("\n=== Typed GET ===")

    with HTTPClient() as client:
        post = client.send(HTTPClientRequest(base_uri=f"{API}/posts/1"), Post)

    print(f"Post #{post.id}: {post.title}")


def get_with_query():
    """Query parameters from a mapping."""
    print("\n=== GET with endpoint_params ===")

    with HTTPClient(config=HTTPClientConfig.create(timeout=10)) as client:
        posts = client.send(
            HTTPClientRequest(base_uri=f"{API}/posts", endpoint_params={"UserId": 1}),
            List[Post],
        )

    print(f"User 1 has {len(posts)} posts")


def post_with_json():
    """POST a pydantic model, null fields are not sent."""
    print("\n=== POST with JSON ===")

    with HTTPClient() as client:
        created = client.send(
            HTTPClientRequest(
                base_uri=f"{API}/posts",
                method="POST",
                request_body=Post(userId=1, title="My Post", body="This is the content"),
            ),
            Post,
        )

    print(f"Created: {created}")


def delete_and_errors():
    """Void result and ApiError."""
    print("\n=== DELETE / errors ===")

    with HTTPClient() as client:
        client.send(HTTPClientRequest(base_uri=f"{API}/posts/1", method="DELETE"))
        print("Deleted post 1")

        try:
            client.send(HTTPClientRequest(base_uri=f"{API}/missing-endpoint"), Post)
        except ApiError as e:
            print(f"ApiError {e.status_code}: {e.detail[:60]!r}")


async def async_get():
    """Same request through AsyncHTTPClient."""
    print("\n=== Async GET ===")

    async with AsyncHTTPClient() as client:
        posts = await asyncio.gather(*[
            client.send(HTTPClientRequest(base_uri=f"{API}/posts/{i}"), Post) for i in range(1, 4)
        ])

    for post in posts:
        print(f"  #{post.id}: {post.title[:40]}")


if __name__ == "__main__":
    typed_get()
    get_with_query()
    post_with_json()
    delete_and_errors()
    asyncio.run(async_get())

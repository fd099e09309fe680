"""Minimal Blogger v3 API client: list, look up, update and delete posts."""

import time
from typing import Any
from urllib.parse import urlparse

import httpx
from rich.console import Console

from .config import BLOGGER_API_BASE
from .models import BlogPost

console = Console()

# Largest page the posts.list endpoint serves
MAX_PAGE_SIZE = 50


class BloggerError(Exception):
    """Raised when a Blogger API call fails."""

    def __init__(self, message: str, status_code: int | None = None, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class BloggerClient:
    """Blog-scoped API client.

    Reads are authenticated with the API key; writes additionally need the
    OAuth bearer token.
    """

    def __init__(
        self,
        blog_id: str,
        api_key: str,
        access_token: str | None = None,
        client: httpx.Client | None = None,
        timeout: float = 30,
    ):
        self.blog_id = blog_id
        self.api_key = api_key
        self.access_token = access_token
        self._client = client or httpx.Client(timeout=timeout)
        self._owns_client = client is None

    def __enter__(self) -> "BloggerClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        url = f"{BLOGGER_API_BASE}/blogs/{self.blog_id}{path}"
        headers = {"Content-Type": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"

        try:
            response = self._client.request(method, url, headers=headers, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            try:
                payload = e.response.json()
            except ValueError:
                payload = e.response.text
            raise BloggerError(
                f"HTTP {e.response.status_code} for {method} {path}",
                status_code=e.response.status_code,
                payload=payload,
            ) from e
        except httpx.RequestError as e:
            raise BloggerError(f"Request failed for {method} {path}: {e}") from e

        return response

    def list_posts(
        self, max_results: int = 500, page_size: int = MAX_PAGE_SIZE, page_delay: float = 1.0
    ) -> list[BlogPost]:
        """Fetch posts newest first, following nextPageToken.

        Args:
            max_results: Stop once this many posts are collected
            page_size: Posts requested per page
            page_delay: Seconds to wait between page requests

        Returns:
            At most max_results posts

        Raises:
            BloggerError: If any page request fails
        """
        posts: list[BlogPost] = []
        page_token: str | None = None
        page = 0

        while True:
            page += 1
            params = {"maxResults": min(page_size, max_results), "key": self.api_key}
            if page_token:
                params["pageToken"] = page_token

            console.print(f"[dim]Fetching posts page {page}...[/dim]")
            data = self._request("GET", "/posts", params=params).json()

            posts.extend(BlogPost.model_validate(item) for item in data.get("items", []))
            page_token = data.get("nextPageToken")

            if len(posts) >= max_results:
                return posts[:max_results]
            if not page_token:
                return posts

            if page_delay > 0:
                time.sleep(page_delay)

    def find_post_by_url(self, post_url: str) -> BlogPost | None:
        """Look up a post by its public URL.

        Returns:
            The post, or None if the blog has no post at that path

        Raises:
            BloggerError: For failures other than "not found"
        """
        path = urlparse(post_url).path
        try:
            data = self._request("GET", "/posts/bypath", params={"path": path, "key": self.api_key}).json()
        except BloggerError as e:
            if e.status_code == 404:
                return None
            raise

        post = BlogPost.model_validate(data)
        # bypath ignores the host; a mapping for another blog must not match
        if post.url and post.url.split("://")[-1] != post_url.split("://")[-1]:
            return None
        return post

    def update_post(self, post_id: str, title: str, content: str) -> None:
        """Replace a post's title and body.

        Raises:
            BloggerError: If the update fails
        """
        self._request("PUT", f"/posts/{post_id}", json={"title": title, "content": content})

    def delete_post(self, post_id: str) -> bool:
        """Delete a post.

        Returns:
            True if deleted, False if it was already gone (404)

        Raises:
            BloggerError: For any other failure
        """
        try:
            self._request("DELETE", f"/posts/{post_id}")
        except BloggerError as e:
            if e.status_code == 404:
                return False
            raise
        return True

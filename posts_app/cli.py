import logging
import mimetypes
import os
import sys
from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import Any, Callable

import httpx

logging.basicConfig(format="%(message)s", level=logging.INFO)
logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080/api/v1"

parser = ArgumentParser(description="Manage blog posts through the posts API")
parser.add_argument(
    "--base-url",
    default=os.environ.get("POSTS_API_URL", DEFAULT_BASE_URL),
    help="base URL of the posts API",
)
parser.add_argument(
    "-y", "--yes", action="store_true", help="do not ask for confirmation"
)
commands = parser.add_subparsers(dest="command", required=True)
commands.add_parser("list", help="list posts, newest first")
show_parser = commands.add_parser("show", help="show one post")
show_parser.add_argument("id")
create_parser = commands.add_parser("create", help="create a post")
edit_parser = commands.add_parser("edit", help="replace the title and content of a post")
edit_parser.add_argument("id")
for sub in (create_parser, edit_parser):
    sub.add_argument("-t", "--title", required=True)
    sub.add_argument("-c", "--content", required=True)
    sub.add_argument("-i", "--image", type=Path, help="image file to attach")
delete_parser = commands.add_parser("delete", help="delete a post and its image")
delete_parser.add_argument("id")


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code


class PostsClient:
    def __init__(self, base_url: str, client: httpx.Client | None = None):
        self._client = client or httpx.Client(base_url=base_url, timeout=30)

    def _request(self, method: str, path: str, **kwargs) -> Any:
        response = self._client.request(method, path, **kwargs)
        if response.is_error:
            try:
                message = response.json()["message"]
            except (ValueError, KeyError):
                message = response.text or response.reason_phrase
            raise ApiError(response.status_code, message)
        return response.json()

    def _form(self, title: str, content: str, image: Path | None) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"data": {"title": title, "content": content}}
        if image:
            content_type = mimetypes.guess_type(image.name)[0]
            kwargs["files"] = {
                "image": (
                    image.name,
                    image.read_bytes(),
                    content_type or "application/octet-stream",
                )
            }
        return kwargs

    def get_posts(self) -> list[dict[str, Any]]:
        return self._request("GET", "/posts")

    def get_post(self, post_id: str) -> dict[str, Any]:
        return self._request("GET", f"/posts/{post_id}")

    def create_post(
        self, title: str, content: str, image: Path | None = None
    ) -> dict[str, Any]:
        return self._request("POST", "/posts", **self._form(title, content, image))

    def update_post(
        self, post_id: str, title: str, content: str, image: Path | None = None
    ) -> dict[str, Any]:
        return self._request(
            "PUT", f"/posts/{post_id}", **self._form(title, content, image)
        )

    def delete_post(self, post_id: str) -> str:
        return self._request("DELETE", f"/posts/{post_id}")["message"]


def confirm(question: str, ask: Callable[[str], str] = input) -> bool:
    return ask(f"{question} [y/N] ").strip().lower() in {"y", "yes"}


def _render(post: dict[str, Any]) -> str:
    lines = [
        f"{post['title']}  ({post['id']})",
        f"created {post['createdAt']}  updated {post.get('updatedAt') or '-'}",
    ]
    if post.get("imageUrl"):
        lines.append(f"image {post['imageUrl']}")
    lines.extend(["", post["content"]])
    return "\n".join(lines)


def run(
    args: Namespace,
    client: PostsClient,
    ask: Callable[[str], str] = input,
    out: Callable[[str], None] = print,
) -> int:
    questions = {
        "create": lambda: f"Create post '{args.title}'?",
        "edit": lambda: f"Save changes to post {args.id}?",
        "delete": lambda: f"Delete post {args.id}? This cannot be undone.",
    }
    if args.command in questions and not args.yes:
        if not confirm(questions[args.command](), ask):
            out("Cancelled")
            return 0

    try:
        if args.command == "list":
            for post in client.get_posts():
                marker = "[img]" if post.get("hasImage") else "     "
                out(f"{post['id']}  {post['createdAt']}  {marker}  {post['title']}")
        elif args.command == "show":
            out(_render(client.get_post(args.id)))
        elif args.command == "create":
            post = client.create_post(args.title, args.content, args.image)
            out(f"Created post {post['id']}")
        elif args.command == "edit":
            post = client.update_post(args.id, args.title, args.content, args.image)
            out(f"Updated post {post['id']}")
        elif args.command == "delete":
            out(client.delete_post(args.id))
    except ApiError as exc:
        logger.error(f"Request failed status={exc.status_code}: {exc}")
        return 1
    except httpx.HTTPError as exc:
        logger.error(f"Could not reach the posts API: {exc}")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parser.parse_args(argv)
    return run(args, PostsClient(args.base_url))


if __name__ == "__main__":
    sys.exit(main())

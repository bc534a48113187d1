from __future__ import annotations

import asyncio

from service_tree import HttpError, Request, Response, authenticate, directory, handle_request, http_get

TOKENS = {"t-user": {"name": "alice", "roles": {"user"}}, "t-admin": {"name": "root", "roles": {"user", "admin"}}}


@authenticate
def user_profile(user, request):
    """Requires a valid token."""
    return {"profile": user["name"], "access": "restricted"}


@authenticate
def admin_settings(user, request):
    """Requires the admin role."""
    if "admin" not in user["roles"]:
        raise HttpError(403, "Admin role required")
    return {"settings": "System Config", "access": "admin_only"}


async def public_info(request, auth):
    # Never calls auth(): a request without credentials still succeeds
    return Response(body={"status": "online", "access": "public"})


root = directory(
    {
        "public": http_get(public_info),
        "profile": http_get(user_profile),
        "admin": http_get(admin_settings),
    }
)
handle = handle_request(root)


def accessor(request: Request):
    async def auth():
        header = request.headers.get("Authorization")
        if not header:
            raise HttpError(401, "Authentication required")
        user = TOKENS.get(str(header).removeprefix("Bearer "))
        if user is None:
            raise HttpError(401, "Invalid token")
        return user

    return auth


def show(status, headers, body):
    print(f"  -> {status} {body['message'] if status >= 400 else body}")


async def main():
    for title, path, token in [
        ("1. Public access", "/public", None),
        ("2. Profile WITHOUT token", "/profile", None),
        ("3. Profile WITH user token", "/profile", "t-user"),
        ("4. Admin WITH user token", "/admin", "t-user"),
        ("5. Admin WITH admin token", "/admin", "t-admin"),
    ]:
        print(f"--- {title} ---")
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        request = Request(method="GET", path=path, headers=headers)
        await handle(accessor(request), request, show)


if __name__ == "__main__":
    asyncio.run(main())

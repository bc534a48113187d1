from __future__ import annotations

import asyncio
import logging

from service_tree import Dispatcher, Request, Response, directory, get_request_data, http_node, json_node


async def invoice_list(request, auth):
    return Response(body=["Inv-001", "Inv-002"])


async def stock_level(request, auth):
    query = get_request_data(request) or {}
    return Response(body={"item": query.get("item"), "qty": 42})


async def restock(request, auth):
    payload = get_request_data(request)
    return Response(body={"restocked": payload})


# Each module is a subtree; the application composes them under one root
billing = directory({"invoices": http_node({"GET": invoice_list})})
inventory = directory({"stock": http_node({"GET": stock_level, "POST": restock})})
root = directory({"billing": billing, "inventory": inventory, "version": json_node("1.0")})


async def anonymous():
    return None


async def main():
    dispatcher = Dispatcher(root).plug("logging")

    print("--- Service Composition Demo ---")
    for method, path, body in [
        ("GET", "/billing/invoices", None),
        ("GET", "/inventory/stock?item=part-123", None),
        ("POST", "/inventory/stock", '{"item": "part-123", "qty": 10}'),
        ("OPTIONS", "/inventory/stock", None),
        ("GET", "/inventory/warehouse", None),
    ]:
        response = await dispatcher.respond(anonymous, Request(method=method, path=path, body=body))
        payload = response.body
        if response.status_code >= 400:
            payload = payload["message"]
        print(f"{method} {path} -> {response.status_code} {payload}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")
    asyncio.run(main())

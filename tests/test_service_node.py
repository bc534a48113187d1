# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Tests for ServiceNode and the node builders."""

import dataclasses

import pytest

from service_tree import (
    Request,
    Response,
    ServiceNode,
    directory,
    http_get,
    http_node,
    http_post,
    http_put,
    json_node,
)


async def echo(request, auth):
    return Response(body=request.path)


async def _no_auth():
    raise AssertionError("authentication must not be requested")


class TestServiceNode:
    def test_defaults(self):
        node = ServiceNode()
        assert dict(node.methods) == {}
        assert dict(node.children) == {}
        assert node.handler("GET") is None

    def test_unknown_verb_rejected(self):
        with pytest.raises(ValueError, match="PATCH"):
            ServiceNode(methods={"PATCH": echo})

    def test_child_must_be_node(self):
        with pytest.raises(TypeError, match="child"):
            ServiceNode(children={"child": {"methods": {}}})

    def test_mappings_are_read_only(self):
        source = {"GET": echo}
        node = ServiceNode(methods=source, children={"a": ServiceNode()})
        source["POST"] = echo
        assert "POST" not in node.methods
        with pytest.raises(TypeError):
            node.methods["PUT"] = echo  # type: ignore[index]
        with pytest.raises(TypeError):
            node.children["b"] = ServiceNode()  # type: ignore[index]

    def test_frozen(self):
        node = ServiceNode()
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.methods = {}  # type: ignore[misc]

    def test_hashable_by_identity(self):
        first, second = ServiceNode(methods={"GET": echo}), ServiceNode(methods={"GET": echo})
        assert first != second
        assert first == first
        assert len({first, second, first}) == 2
        assert {first: "a"}[first] == "a"

    def test_child_subclass_accepted(self):
        class Leaf(ServiceNode):
            pass

        leaf = Leaf(methods={"GET": echo})
        assert ServiceNode(children={"leaf": leaf}).children["leaf"] is leaf

    def test_repr(self):
        node = ServiceNode(methods={"GET": echo}, children={"a": ServiceNode()})
        assert repr(node) == "ServiceNode(methods=[GET], children=[a])"


class TestBuilders:
    @pytest.mark.asyncio
    async def test_json_node(self):
        child = ServiceNode()
        node = json_node({"v": 1}, {"child": child})
        assert node.children["child"] is child
        response = await node.handler("GET")(Request(method="GET"), _no_auth)
        assert response == Response(status_code=200, headers={}, body={"v": 1})

    @pytest.mark.asyncio
    async def test_directory(self):
        node = directory({"a": ServiceNode()})
        assert list(node.children) == ["a"]
        response = await node.handler("GET")(Request(method="GET"), _no_auth)
        assert response.body == "directory"

    def test_http_node(self):
        node = http_node({"GET": echo, "DELETE": echo}, {"x": ServiceNode()})
        assert set(node.methods) == {"GET", "DELETE"}
        assert list(node.children) == ["x"]

    @pytest.mark.parametrize(
        ("builder", "verb"), [(http_get, "GET"), (http_post, "POST"), (http_put, "PUT")]
    )
    def test_single_verb_leaves(self, builder, verb):
        node = builder(echo)
        assert dict(node.methods) == {verb: echo}
        assert dict(node.children) == {}

"""tests/unit/test_request.py

Unit tests for RequestInstance.

Test Coverage:
    - Chain operations mutate and return the same instance
    - Header, status and callback copies are isolated from the template
    - Send modes and default Content-Type handling
    - Missing url handling
    - Reset after send (success and failure)
    - Receiver passed to hooks
    - Snapshotting an instance into a preset
"""

import json

import pytest

from presetreq.client.request import RequestInstance, SendMode
from presetreq.client.template import Template
from presetreq.exceptions import ConfigurationError, TransportError

# ============================================================================
# TEST CLASS: Chain operations
# ============================================================================


class TestChaining:
    """Tests for the fluent configuration API."""

    def test_chain_returns_same_instance(self, root):
        """Test that chain calls keep working on one object."""
        instance = root.get("/a")
        assert instance.headers({"X-A": "1"}) is instance
        assert instance.status({"ok": 200}) is instance
        assert instance.on("ok", print) is instance
        assert instance.descr("note") is instance
        assert instance.post("/b") is instance
        assert instance.method == "POST"
        assert instance.url == "/b"

    def test_headers_merge_shallowly(self, root):
        """Test that headers override per key without deep merging."""
        instance = root.headers({"X-Meta": {"a": 1}, "X-B": "1"})
        instance.headers({"X-Meta": {"b": 2}})
        assert instance.header_map == {"X-Meta": {"b": 2}, "X-B": "1"}

    def test_headers_none_is_ignored(self, root):
        """Test that headers(None) leaves headers untouched."""
        instance = root.headers({"X-A": "1"}).headers(None)
        assert instance.header_map == {"X-A": "1"}

    def test_query_params(self, root):
        """Test that params are appended to the url."""
        instance = root.get("/search", {"q": "two words", "tag": ["a", "b"]})
        assert instance.url == "/search?q=two%20words&tag=a&tag=b"

    def test_empty_params_leave_url(self, root):
        """Test that no question mark is added for empty params."""
        assert root.get("/search", {"q": None}).url == "/search"

    def test_invalid_status_rule(self, root):
        """Test that status() validates the rule grammar."""
        with pytest.raises(ConfigurationError):
            root.status({"ok": "two hundred"})

    def test_method_names_are_upper_case(self, root):
        """Test the stored method names."""
        assert root.patch("/").method == "PATCH"
        assert root.delete("/").method == "DELETE"


# ============================================================================
# TEST CLASS: Isolation
# ============================================================================


class TestIsolation:
    """Tests that instances never share mutable state."""

    def test_instance_does_not_mutate_template(self):
        """Test that instance changes stay on the instance."""
        root = Template.root(headers={"X-A": "1"}, status={"ok": 200})
        instance = root.get("/")
        instance.headers({"X-A": "2"}).status({"ok": 201}).on("ok", print)

        assert root.default_headers["X-A"] == "1"
        assert root.default_status["ok"] == 200
        assert "ok" not in root.default_callbacks

    def test_siblings_are_independent(self):
        """Test that two instances of one template do not see each other."""
        root = Template.root(headers={"X-A": "1"}, status={"ok": 200})
        first = root.get("/first").headers({"X-First": "1"}).status({"ok": 201})
        second = root.get("/second").on("ok", print)

        assert "X-First" not in second.header_map
        assert second.status_map == {"ok": 200}
        assert "ok" not in first.callback_map


# ============================================================================
# TEST CLASS: Sending
# ============================================================================


class TestSend:
    """Tests for the send operations."""

    @pytest.mark.asyncio
    async def test_send_raw(self, root, transport):
        """Test that send passes data and headers through."""
        response = await root.post("/items").headers({"X-A": "1"}).send("payload")

        url, options = transport.last
        assert url == "/items"
        assert options.method == "POST"
        assert options.body == "payload"
        assert options.headers == {"X-A": "1"}
        assert options.format is None
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_send_without_data(self, root, transport):
        """Test that send() with no data sets no content type."""
        await root.get("/").send()
        _, options = transport.last
        assert options.body is None
        assert "Content-Type" not in options.headers

    @pytest.mark.asyncio
    async def test_send_text(self, root, transport):
        """Test urlencoded text sends."""
        await root.post("/").send_text({"text": "sample", "n": [1, 2]})
        _, options = transport.last
        assert options.body == "text=sample&n=1&n=2"
        assert options.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert options.format == "text"

    @pytest.mark.asyncio
    async def test_send_text_passes_strings_through(self, root, transport):
        """Test that an already encoded string is not encoded again."""
        await root.post("/").send_text("a=1")
        assert transport.last[1].body == "a=1"

    @pytest.mark.asyncio
    async def test_send_json(self, root, transport):
        """Test JSON sends."""
        await root.post("/").send_json({"data": "sample"})
        _, options = transport.last
        assert json.loads(options.body) == {"data": "sample"}
        assert options.headers["Content-Type"] == "application/json"
        assert options.format == "json"

    @pytest.mark.asyncio
    async def test_send_form(self, root, transport):
        """Test that form sends keep the data and headers as they are."""
        form = {"field": "value"}
        await root.post("/").send_form(form)
        _, options = transport.last
        assert options.body is form
        assert "Content-Type" not in options.headers
        assert options.format == "form"

    @pytest.mark.asyncio
    async def test_explicit_content_type_kept(self, root, transport):
        """Test that a caller-set Content-Type is not overwritten."""
        await root.post("/").headers({"content-type": "text/plain"}).send_json([1])
        _, options = transport.last
        assert options.headers == {"content-type": "text/plain"}

    @pytest.mark.asyncio
    async def test_send_with_mode_name(self, root, transport):
        """Test that send_with accepts the mode as a string."""
        await root.post("/").send_with("json", {"a": 1})
        assert transport.last[1].format == SendMode.JSON.value

    @pytest.mark.asyncio
    async def test_transform_applies_to_every_mode(self, transport):
        """Test that the preset transform runs before serialization."""
        seen = []

        def transform(request, value):
            seen.append(value)
            return value

        preset = Template.root(transport, send=transform)
        await preset.post("/").send(0)
        await preset.post("/").send_text({"step": 1})
        await preset.post("/").send_json({"step": 2})
        await preset.post("/").send_form({"step": 3})

        assert seen == [0, {"step": 1}, {"step": 2}, {"step": 3}]

    @pytest.mark.asyncio
    async def test_transform_result_is_serialized(self, transport):
        """Test that serialization uses the transformed value."""
        preset = Template.root(
            transport, send=lambda request, value: {**value, "signed": True}
        )
        await preset.post("/").send_json({"a": 1})
        assert json.loads(transport.last[1].body) == {"a": 1, "signed": True}

    @pytest.mark.asyncio
    async def test_url_required(self, transport):
        """Test that sending without url fails before anything runs."""
        calls = []
        preset = Template.root(
            transport,
            prepare=lambda request: calls.append("prepare"),
            send=lambda request, value: calls.append("send") or value,
        )

        with pytest.raises(ConfigurationError, match="url is required"):
            await preset.new().send("data")

        assert calls == []
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_transport_required(self):
        """Test that a template without transport cannot send."""
        with pytest.raises(ConfigurationError, match="transport is required"):
            await Template.root().get("/").send()


# ============================================================================
# TEST CLASS: Hooks and receiver
# ============================================================================


class TestHooksReceiver:
    """Tests that hooks see the instance that is being sent."""

    @pytest.mark.asyncio
    async def test_hooks_receive_instance(self, transport):
        """Test that prepare and transform get the sending instance."""
        seen = []

        async def prepare(request):
            seen.append(("prepare", request))

        def transform(request, value):
            seen.append(("send", request))
            return value

        parent = Template.root(transport, prepare=prepare, send=transform)
        child = parent.preset(prepare=prepare, send=transform)
        instance = child.get("/")
        await instance.send()

        assert [kind for kind, _ in seen] == ["prepare", "prepare", "send", "send"]
        assert all(request is instance for _, request in seen)

    @pytest.mark.asyncio
    async def test_prepare_can_set_headers(self, transport):
        """Test that prepare hooks can change the outgoing headers."""

        async def authorize(request):
            request.headers({"Authorization": "Bearer fresh"})

        preset = Template.root(transport, prepare=authorize)
        await preset.get("/").send()
        assert transport.last[1].headers["Authorization"] == "Bearer fresh"

    @pytest.mark.asyncio
    async def test_prepare_post_and_pre_order(self, transport):
        """Test the order of prepare hooks for both strategies."""
        order = []

        def make(name):
            async def prepare(request):
                order.append(name)

            return prepare

        parent = Template.root(transport, prepare=make("parent"))
        post_child = parent.preset(prepare=make("child"))
        pre_child = parent.preset(prepare=make("child"), prepare_merge_strategy="pre")

        await post_child.get("/").send()
        assert order == ["parent", "child"]

        order.clear()
        await pre_child.get("/").send()
        assert order == ["child", "parent"]

    @pytest.mark.asyncio
    async def test_prepare_error_fails_send(self, transport):
        """Test that prepare errors surface once and skip the transport."""

        async def failing(request):
            raise RuntimeError("no token")

        preset = Template.root(transport, prepare=failing)
        with pytest.raises(RuntimeError, match="no token"):
            await preset.get("/").send()
        assert transport.calls == []


# ============================================================================
# TEST CLASS: Reset after send
# ============================================================================


class TestReset:
    """Tests that a sent instance goes back to its template state."""

    @pytest.mark.asyncio
    async def test_reset_after_success(self, transport):
        """Test reset of url, method, message and maps."""
        template = Template.root(
            transport, headers={"X-A": "1"}, status={"ok": 200}, on={"ok": print}
        )
        instance = (
            template.post("/a", {"q": 1})
            .headers({"X-A": "2", "X-B": "3"})
            .status({"ok": "2xx", "err": "5xx"})
            .on("err", print)
            .descr("first")
        )

        await instance.send_json({"a": 1})

        assert instance.url == ""
        assert instance.method == ""
        assert instance.message == ""
        assert instance.format is None
        assert instance.header_map == {"X-A": "1"}
        assert instance.status_map == {"ok": 200}
        assert instance.callback_map == {"ok": print}

    @pytest.mark.asyncio
    async def test_reset_after_transport_failure(self, transport_factory):
        """Test that the instance is reset even when sending failed."""
        transport = transport_factory(error=OSError("refused"))
        instance = Template.root(transport).get("/a").headers({"X-A": "1"})

        with pytest.raises(TransportError):
            await instance.send()

        assert instance.url == ""
        assert instance.header_map == {}

    @pytest.mark.asyncio
    async def test_instance_reusable(self, root, transport):
        """Test that a reset instance can be configured and sent again."""
        instance = root.get("/first").headers({"X-Once": "1"})
        await instance.send()
        await instance.get("/second").send()

        assert [url for url, _ in transport.calls] == ["/first", "/second"]
        assert "X-Once" not in transport.last[1].headers

    @pytest.mark.asyncio
    async def test_content_type_default_not_kept(self, root, transport):
        """Test that a JSON default Content-Type is not carried over."""
        instance = root.post("/")
        await instance.send_json({})
        await instance.post("/").send_form({})
        assert "Content-Type" not in transport.last[1].headers


# ============================================================================
# TEST CLASS: Snapshot presets
# ============================================================================


class TestInstancePreset:
    """Tests for RequestInstance.preset()."""

    def test_snapshot_uses_live_state(self, root, transport):
        """Test that the snapshot captures the instance's current maps."""
        instance = root.get("/").headers({"X-A": "1"}).status({"ok": 200})
        instance.on("ok", print)

        snapshot = instance.preset()

        assert dict(snapshot.default_headers) == {"X-A": "1"}
        assert dict(snapshot.default_status) == {"ok": 200}
        assert dict(snapshot.default_callbacks) == {"ok": print}
        assert snapshot.transport is transport
        assert snapshot.parent is None

    def test_snapshot_is_detached(self, root):
        """Test that later instance changes do not affect the snapshot."""
        instance = root.get("/").headers({"X-A": "1"})
        snapshot = instance.preset()
        instance.headers({"X-A": "2"})
        assert snapshot.default_headers["X-A"] == "1"

    def test_snapshot_keeps_stages(self, transport):
        """Test that composed hooks survive the snapshot."""

        def transform(request, value):
            return value

        instance = Template.root(transport, send=transform).get("/")
        assert instance.preset().transform_stages == (transform,)

    def test_repr(self, root):
        """Test the instance representation."""
        assert repr(root.get("/a")) == "<RequestInstance GET /a>"
        assert isinstance(root.new(), RequestInstance)

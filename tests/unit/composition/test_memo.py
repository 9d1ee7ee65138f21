from __future__ import annotations

from pagecompose.core.composition import ContentDescriptor, MemoizedRender, RenderRequest

NO_MUTATIONS: dict = {}
NO_FORM_VALUES: dict = {}


def request_for(descriptor, queries, *, auxiliary=False) -> RenderRequest:
    # Narrowed mappings are compared by identity, so unchanged requests share them.
    return RenderRequest(
        descriptor=descriptor,
        queries=queries,
        mutations=NO_MUTATIONS,
        form_values=NO_FORM_VALUES,
        position=0,
        key="a",
        auxiliary=auxiliary,
    )


class TestMemoizedRender:
    def test_equal_request_reuses_element(self, render) -> None:
        memo = MemoizedRender(render)
        descriptor = ContentDescriptor(key="a")
        queries = {"user": 1}
        first = memo(request_for(descriptor, queries))
        second = memo(request_for(descriptor, queries))
        assert second is first
        assert render.calls == 1 and memo.calls == 1

    def test_changed_mapping_rerenders(self, render) -> None:
        memo = MemoizedRender(render)
        descriptor = ContentDescriptor(key="a")
        before = {"user": 1}
        memo(request_for(descriptor, before))
        memo(request_for(descriptor, before))
        assert render.calls == 1
        memo(request_for(descriptor, {"user": 2}))
        assert render.calls == 2

    def test_fresh_mutation_mapping_rerenders(self, render) -> None:
        memo = MemoizedRender(render)
        descriptor = ContentDescriptor(key="a")
        queries = {"user": 1}
        memo(request_for(descriptor, queries))
        memo(
            RenderRequest(
                descriptor=descriptor,
                queries=queries,
                mutations={"save": "fn"},
                form_values=NO_FORM_VALUES,
                position=0,
                key="a",
            )
        )
        assert render.calls == 2

    def test_content_and_auxiliary_slots_are_separate(self, render) -> None:
        memo = MemoizedRender(render)
        descriptor = ContentDescriptor(key="a")
        queries = {}
        memo(request_for(descriptor, queries))
        memo(request_for(descriptor, queries, auxiliary=True))
        assert render.calls == 2

    def test_clear_forgets_previous_requests(self, render) -> None:
        memo = MemoizedRender(render)
        descriptor = ContentDescriptor(key="a")
        queries = {}
        memo(request_for(descriptor, queries))
        memo.clear()
        memo(request_for(descriptor, queries))
        assert render.calls == 2

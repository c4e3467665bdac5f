"""canvas_layout/services/render_shells.py

Structural sharing for the objects handed to the rendering layer.

The renderer diffs its node list by object identity on every pass.  Handing it
freshly built objects for an unrelated change (a text edit, a colour change)
makes it treat every node as changed, and the effects it fires in response can
feed back into the state container until the update loop never settles.

The shells built here carry only what the renderer lays out by: position,
size and selection.  ``data`` is a per-id placeholder; cards read their
content from the store directly, so content edits never produce a new shell.
Placeholders of nodes that left the board are dropped whenever the list
changes.
A shell is rebuilt only when one of those layout fields changes, and when no
shell changed the previous list object itself is returned.
"""

from typing import AbstractSet, Dict, Iterable, List, Sequence
import logging

from canvas_layout.models import CanvasNode, RenderShell, ShellData

log = logging.getLogger(__name__)


class RenderShellCache:
    """Per-board memory of the last shells returned to the renderer.

    Owned by whoever talks to the renderer for one board; never share an
    instance between boards or between interleaved callers.
    """

    def __init__(self) -> None:
        self.previous: List[RenderShell] = []
        self._by_id: Dict[str, RenderShell] = {}
        self._data_shells: Dict[str, ShellData] = {}

    def data_shell(self, node_id: str) -> ShellData:
        shell = self._data_shells.get(node_id)
        if shell is None:
            shell = ShellData(id=node_id)
            self._data_shells[node_id] = shell
        return shell

    def get(self, node_id: str) -> RenderShell | None:
        return self._by_id.get(node_id)

    def remember(self, shells: List[RenderShell]) -> None:
        self.previous = shells
        self._by_id = {shell.id: shell for shell in shells}

    def prune(self, active_ids: Iterable[str]) -> None:
        """Forget data placeholders of nodes no longer on the board."""
        active = set(active_ids)
        for node_id in [k for k in self._data_shells if k not in active]:
            del self._data_shells[node_id]

    def clear(self) -> None:
        self.previous = []
        self._by_id.clear()
        self._data_shells.clear()

    def build(self, nodes: Sequence[CanvasNode], selected_ids: AbstractSet[str]) -> List[RenderShell]:
        return build_render_shells(nodes, selected_ids, self)


def _unchanged(prev: RenderShell, node: CanvasNode, selected: bool) -> bool:
    same_position = prev.position is node.position or prev.position == node.position
    return (same_position
            and prev.selected == selected
            and prev.width == node.width
            and prev.height == node.height)


def build_render_shells(
    nodes: Sequence[CanvasNode],
    selected_ids: AbstractSet[str],
    cache: RenderShellCache,
) -> List[RenderShell]:
    """Return render shells for *nodes*, reusing every shell that did not change."""
    prev_list = cache.previous
    all_reused = len(nodes) == len(prev_list)

    result: List[RenderShell] = []
    for index, node in enumerate(nodes):
        selected = node.id in selected_ids
        prev = cache.get(node.id)

        if prev is not None and _unchanged(prev, node, selected):
            if all_reused and prev_list[index] is not prev:
                all_reused = False
            result.append(prev)
            continue

        all_reused = False
        result.append(RenderShell(
            id=node.id,
            type=node.type,
            position=node.position,
            data=cache.data_shell(node.id),
            selected=selected,
            width=node.width,
            height=node.height,
        ))

    if all_reused:
        return prev_list

    cache.prune(node.id for node in nodes)
    cache.remember(result)
    return result

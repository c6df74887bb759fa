"""
组件加载顺序：依赖优先的拓扑排序，带环检测。

使用显式栈的深度优先遍历，避免依赖链较深时触发递归深度限制。
"""

from __future__ import annotations

from typing import Iterator, List, Mapping, Sequence, Set, Tuple

from lootcore.core.errors import CircularDependencyError


def compute_load_order(graph: Mapping[str, Sequence[str]]) -> List[str]:
    """
    计算依赖优先的加载顺序。

    只遍历已注册（graph 中存在）的节点；未注册的依赖名被忽略。
    组件按注册顺序访问，依赖按声明顺序访问，结果确定。

    Raises:
        CircularDependencyError: 遍历时遇到仍处于 "visiting" 状态的节点
    """
    visited: Set[str] = set()
    order: List[str] = []

    for root in graph:
        if root in visited:
            continue

        visiting: Set[str] = {root}
        path: List[str] = [root]
        stack: List[Tuple[str, Iterator[str]]] = [(root, iter(graph[root]))]

        while stack:
            node, deps = stack[-1]
            descended = False
            for dep in deps:
                if dep not in graph or dep in visited:
                    continue
                if dep in visiting:
                    cycle = path[path.index(dep):] + [dep]
                    raise CircularDependencyError(dep, cycle)
                visiting.add(dep)
                path.append(dep)
                stack.append((dep, iter(graph[dep])))
                descended = True
                break

            if not descended:
                stack.pop()
                visiting.discard(node)
                path.pop()
                visited.add(node)
                order.append(node)

    return order

from __future__ import annotations

import pytest

from ._gate import require_arch_checks_enabled
from ._utils import iter_python_files, matches_prefix, parse_imports, relkit_root


@pytest.mark.parametrize(
    ("layer", "forbidden"),
    [
        ("core", ("relkit.services", "relkit.cli", "relkit.git", "relkit.github")),
        ("platform", ("relkit.services", "relkit.cli")),
        ("git", ("relkit.services", "relkit.cli")),
        ("github", ("relkit.services", "relkit.cli")),
        ("services", ("relkit.cli",)),
    ],
)
def test_lower_layers_do_not_import_upper_layers(layer: str, forbidden: tuple[str, ...]) -> None:
    require_arch_checks_enabled()

    root = relkit_root()
    offenders: list[str] = []
    for path in iter_python_files(root / layer):
        rel = path.relative_to(root)
        for item in parse_imports(path):
            if any(matches_prefix(item.module, prefix) for prefix in forbidden):
                offenders.append(f"{rel}:{item.line}: forbidden import '{item.module}'")

    assert not offenders, f"{layer} layering violations:\n" + "\n".join(offenders)

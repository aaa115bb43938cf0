"""Demo script for the omni graph builder.

This demonstrates:
1. Loading the two-chain MyOApp declaration with a chain registry
2. Looking up enforced floors on a connection
3. Showing a rejected declaration
4. Printing the topology as a rich table

Usage:
    python examples/demo_topology.py
"""

from rich.console import Console
from rich.panel import Panel

from omnigraph.builder import GraphError, build, load_declaration
from omnigraph.chains import ChainRegistry
from omnigraph.config import OmniGraphSettings, configure_logging
from omnigraph.presets import (
    BASE_SEPOLIA_OAPP,
    DEFAULT_EDGE_CONFIG,
    MY_OAPP_DECLARATION,
    OPTIMISM_SEPOLIA_OAPP,
)
from omnigraph.report import render_table

console = Console()


def main() -> None:
    settings = OmniGraphSettings()
    configure_logging(settings)
    chains = ChainRegistry.from_settings(settings)

    console.print(Panel.fit("Omnichain Topology Demo", style="bold blue"))

    graph = load_declaration(MY_OAPP_DECLARATION, chains)
    console.print(render_table(graph, chains))

    for msg_type in (1, 2, 3):
        floor = graph.enforced_floor(OPTIMISM_SEPOLIA_OAPP, BASE_SEPOLIA_OAPP, msg_type)
        if floor is None:
            console.print(f"msgType {msg_type}: [yellow]no floor configured[/yellow]")
        else:
            console.print(
                f"msgType {msg_type}: {floor.option_type.name} "
                f"gas>={floor.gas} value>={floor.value}"
            )

    console.print("\n[bold]Declaring the same connection twice:[/bold]")
    try:
        build(
            [OPTIMISM_SEPOLIA_OAPP, BASE_SEPOLIA_OAPP],
            [
                (OPTIMISM_SEPOLIA_OAPP, BASE_SEPOLIA_OAPP, DEFAULT_EDGE_CONFIG),
                (OPTIMISM_SEPOLIA_OAPP, BASE_SEPOLIA_OAPP, DEFAULT_EDGE_CONFIG),
            ],
            chains,
        )
    except GraphError as e:
        console.print(f"[red]{e.kind.value}[/red]: {e.message}")


if __name__ == "__main__":
    main()

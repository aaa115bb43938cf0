"""Report Generator for omni graphs.

Generates human-readable and machine-readable summaries of a validated
topology, for review before it is handed to the wiring process.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

import structlog
from rich.table import Table

from omnigraph.builder.graph import OmniGraph
from omnigraph.chains import ChainRegistry
from omnigraph.models.graph_nodes import EndpointPoint

logger = structlog.get_logger()


class ReportFormat(str, Enum):
    """Output format for reports."""

    TEXT = "text"
    JSON = "json"
    MARKDOWN = "markdown"


@dataclass
class TopologySummary:
    """Summary statistics for a graph."""

    total_contracts: int = 0
    total_chains: int = 0
    total_connections: int = 0
    total_options: int = 0
    unconnected: list[str] = field(default_factory=list)
    by_option_type: dict[str, int] = field(default_factory=dict)


@dataclass
class TopologyReport:
    """Complete topology report."""

    timestamp: datetime
    summary: TopologySummary
    graph: OmniGraph
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "summary": {
                "total_contracts": self.summary.total_contracts,
                "total_chains": self.summary.total_chains,
                "total_connections": self.summary.total_connections,
                "total_options": self.summary.total_options,
                "unconnected": self.summary.unconnected,
                "by_option_type": self.summary.by_option_type,
            },
            "graph": self.graph.to_dict(),
            "metadata": self.metadata,
        }


class ReportGenerator:
    """Generates topology reports in various formats."""

    def __init__(self, chains: ChainRegistry | None = None):
        self._chains = chains
        self._logger = logger.bind(component="ReportGenerator")

    def generate(
        self,
        graph: OmniGraph,
        format: ReportFormat = ReportFormat.TEXT,
        metadata: dict[str, Any] | None = None,
    ) -> str:
        """Generate a report for a graph.

        Args:
            graph: Validated graph
            format: Output format
            metadata: Additional metadata to include

        Returns:
            Formatted report string
        """
        report = TopologyReport(
            timestamp=datetime.now(timezone.utc),
            summary=self.summarize(graph),
            graph=graph,
            metadata=metadata or {},
        )
        self._logger.debug("Generating report", format=format.value)

        match format:
            case ReportFormat.JSON:
                return self._format_json(report)
            case ReportFormat.MARKDOWN:
                return self._format_markdown(report)
            case _:
                return self._format_text(report)

    def summarize(self, graph: OmniGraph) -> TopologySummary:
        """Build summary statistics for a graph."""
        summary = TopologySummary(
            total_contracts=len(graph.nodes),
            total_chains=len(graph.chain_ids),
            total_connections=len(graph.edges),
        )

        connected = set()
        for edge in graph.edges:
            connected.add(edge.source.key)
            connected.add(edge.target.key)
            for option in edge.config.enforced_options:
                summary.total_options += 1
                name = option.option_type.name
                summary.by_option_type[name] = summary.by_option_type.get(name, 0) + 1

        summary.unconnected = [
            self.label(p) for p in graph.nodes if p.key not in connected
        ]
        return summary

    def label(self, point: EndpointPoint) -> str:
        """Human-readable node label, using the chain name when known."""
        name = self._chains.name_of(point.chain_id) if self._chains else None
        return f"{point.contract_name}@{name or point.chain_id}"

    def _format_text(self, report: TopologyReport) -> str:
        """Format as plain text."""
        lines = []
        s = report.summary

        # Header
        lines.append("=" * 60)
        lines.append("OMNICHAIN TOPOLOGY REPORT")
        lines.append("=" * 60)
        lines.append(f"Timestamp: {report.timestamp.isoformat()}")
        lines.append("")

        # Summary
        lines.append("SUMMARY")
        lines.append("-" * 40)
        lines.append(f"Contracts:         {s.total_contracts}")
        lines.append(f"Chains:            {s.total_chains}")
        lines.append(f"Connections:       {s.total_connections}")
        lines.append(f"Enforced Options:  {s.total_options}")
        lines.append("")

        if s.unconnected:
            lines.append("UNCONNECTED CONTRACTS")
            lines.append("-" * 40)
            for label in s.unconnected:
                lines.append(f"  {label}")
            lines.append("")

        # Details
        lines.append("CONNECTIONS")
        lines.append("-" * 40)

        for edge in report.graph.edges:
            lines.append(f"\n{self.label(edge.source)} -> {self.label(edge.target)}")
            if not edge.config.enforced_options:
                lines.append("  (no enforced options)")
            for o in edge.config.enforced_options:
                slot = f"[{o.index}]" if o.index is not None else ""
                lines.append(
                    f"  msgType {o.msg_type}: {o.option_type.name}{slot} "
                    f"gas={o.gas} value={o.value}"
                )

        lines.append("")
        lines.append("=" * 60)

        return "\n".join(lines)

    def _format_json(self, report: TopologyReport) -> str:
        """Format as JSON."""
        return json.dumps(report.to_dict(), indent=2)

    def _format_markdown(self, report: TopologyReport) -> str:
        """Format as Markdown."""
        lines = []
        s = report.summary

        lines.append("# Omnichain Topology Report")
        lines.append("")
        lines.append(f"**Generated:** {report.timestamp.isoformat()}")
        lines.append("")

        lines.append("## Summary")
        lines.append("")
        lines.append("| Metric | Value |")
        lines.append("|--------|-------|")
        lines.append(f"| Contracts | {s.total_contracts} |")
        lines.append(f"| Chains | {s.total_chains} |")
        lines.append(f"| Connections | {s.total_connections} |")
        lines.append(f"| Enforced Options | {s.total_options} |")
        lines.append("")

        if s.by_option_type:
            lines.append("### Options by Type")
            lines.append("")
            for name, count in sorted(s.by_option_type.items()):
                lines.append(f"- **{name}**: {count}")
            lines.append("")

        lines.append("## Connections")
        lines.append("")
        lines.append("| From | To | msgType | Option | Index | Gas | Value |")
        lines.append("|------|----|---------|--------|-------|-----|-------|")
        for edge in report.graph.edges:
            source = self.label(edge.source)
            target = self.label(edge.target)
            if not edge.config.enforced_options:
                lines.append(f"| `{source}` | `{target}` | - | - | - | - | - |")
            for o in edge.config.enforced_options:
                index = "-" if o.index is None else o.index
                lines.append(
                    f"| `{source}` | `{target}` | {o.msg_type} | {o.option_type.name} "
                    f"| {index} | {o.gas} | {o.value} |"
                )
        lines.append("")

        return "\n".join(lines)


def render_table(graph: OmniGraph, chains: ChainRegistry | None = None) -> Table:
    """Render the connections of a graph as a rich table."""
    generator = ReportGenerator(chains)
    table = Table(title="Omnichain Connections")
    table.add_column("From", style="cyan")
    table.add_column("To", style="cyan")
    table.add_column("msgType", justify="right")
    table.add_column("Option")
    table.add_column("Gas", justify="right", style="green")
    table.add_column("Value", justify="right", style="green")

    for edge in graph.edges:
        source = generator.label(edge.source)
        target = generator.label(edge.target)
        if not edge.config.enforced_options:
            table.add_row(source, target, "-", "-", "-", "-")
        for o in edge.config.enforced_options:
            option = o.option_type.name
            if o.index is not None:
                option = f"{option}[{o.index}]"
            table.add_row(source, target, str(o.msg_type), option, str(o.gas), str(o.value))

    return table

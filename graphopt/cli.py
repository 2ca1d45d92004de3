"""Command-line interface for graphopt."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, Callable, Dict, List, Optional

from graphopt.algorithms import (
    TSPMethod,
    color_graph,
    eulerian_circuit,
    hungarian,
    knapsack,
    maximum_matching,
    solve_tsp,
)
from graphopt.config import GeneticConfig
from graphopt.exceptions import GraphOptError
from graphopt.graph.dot import color_legend, write_dot
from graphopt.graph.io import load_graph, load_graph_with_matching
from graphopt.logging import get_logger, set_global_log_level

logger = get_logger(__name__)

_TSP_METHODS = {
    "exact": TSPMethod.BRANCH_AND_BOUND,
    "mst": TSPMethod.MST_APPROXIMATION,
    "genetic": TSPMethod.GENETIC,
}


def _format_cost(value: Any) -> str:
    """Return an integer-looking cost without a trailing ``.0``.

    Examples:
        7 -> "7"; 7.0 -> "7"; 7.25 -> "7.25".
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _emit(payload: Dict[str, Any], lines: List[str], as_json: bool) -> None:
    if as_json:
        print(json.dumps(payload, indent=2, default=str))
    else:
        print("\n".join(lines))


def _cmd_euler(args: argparse.Namespace) -> None:
    graph = load_graph(args.graph)
    circuit = eulerian_circuit(graph)
    _emit(
        {"circuit": circuit},
        ["Eulerian circuit found:", " -> ".join(map(str, circuit))],
        args.json,
    )
    if args.dot:
        write_dot(graph, args.dot, cycle=circuit)


def _cmd_matching(args: argparse.Namespace) -> None:
    initial = None
    if args.warm_start:
        graph, initial = load_graph_with_matching(args.graph)
    else:
        graph = load_graph(args.graph)
    result = maximum_matching(graph, left=args.left, initial=initial)
    _emit(
        {"left": result.left, "pairs": result.pairs, "size": result.size},
        ["Left partition: " + ", ".join(map(str, result.left)), "Maximum matching:"]
        + [f"{u} - {v}" for u, v in result.pairs],
        args.json,
    )
    if args.dot:
        write_dot(graph, args.dot, matching=result.pairs)


def _cmd_hungarian(args: argparse.Namespace) -> None:
    graph = load_graph(args.graph)
    result = hungarian(graph)
    lines = ["Minimum-cost perfect matching found:"]
    lines.extend(
        f"{x} -> {y} (Cost: {_format_cost(graph.get_edge_weight(x, y))})"
        for x, y in result.pairs
    )
    lines.append(f"Total cost: {_format_cost(result.total_cost)}")
    _emit(
        {"assignment": result.pairs, "total_cost": result.total_cost, "labels": result.labels},
        lines,
        args.json,
    )
    if args.dot:
        write_dot(graph, args.dot, matching=result.pairs)


def _cmd_color(args: argparse.Namespace) -> None:
    graph = load_graph(args.graph)
    result = color_graph(graph)
    legend = color_legend(result.colors)
    lines = [f"Colors used: {result.num_colors}"]
    lines.extend(
        f"  color {c} ({legend[c]}): " + ", ".join(map(str, members))
        for c, members in result.classes().items()
    )
    _emit(
        {"colors": result.colors, "num_colors": result.num_colors, "legend": legend},
        lines,
        args.json,
    )
    if args.dot:
        write_dot(graph, args.dot, coloring=result.colors)


def _cmd_tsp(args: argparse.Namespace) -> None:
    graph = load_graph(args.graph)
    method = _TSP_METHODS[args.method]
    kwargs: Dict[str, Any] = {}
    if method == TSPMethod.GENETIC:
        kwargs["config"] = GeneticConfig(
            population_size=args.population,
            generations=args.generations,
            mutation_rate=args.mutation_rate,
            tournament_size=args.tournament_size,
        )
        kwargs["seed"] = args.seed
    result = solve_tsp(graph, method, **kwargs)
    _emit(
        {"method": method.name, "tour": result.tour, "cost": result.cost},
        [
            f"TSP tour ({args.method}): " + " -> ".join(map(str, result.tour)),
            f"Total cost: {_format_cost(result.cost)}",
        ],
        args.json,
    )
    if args.dot:
        write_dot(graph, args.dot, cycle=result.tour)


def _cmd_knapsack(args: argparse.Namespace) -> None:
    result = knapsack(args.values, args.weights, args.capacity)
    _emit(
        {
            "selected": result.selected,
            "total_value": result.total_value,
            "total_weight": result.total_weight,
        },
        [
            "Selected items: " + ", ".join(map(str, result.selected)),
            f"Total value: {_format_cost(result.total_value)}",
            f"Total weight: {_format_cost(result.total_weight)}",
        ],
        args.json,
    )


def _run(name: str, handler: Callable[[argparse.Namespace], None], args: argparse.Namespace) -> None:
    """Run one command, turning expected failures into exit code 1."""
    start = perf_counter()
    try:
        handler(args)
    except FileNotFoundError as e:
        logger.error(f"Graph file not found: {e.filename}")
        print(f"ERROR: Graph file not found: {e.filename}")
        sys.exit(1)
    except (GraphOptError, ValueError) as e:
        logger.error(f"{name} failed: {type(e).__name__}: {e}")
        print(f"ERROR: {e}")
        sys.exit(1)
    logger.info(f"{name} completed in {(perf_counter() - start) * 1000.0:.1f} ms")


def _add_graph_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("graph", type=Path, help="Path to graph file (#DIGRAPH/#EDGES format)")
    parser.add_argument("--dot", type=Path, default=None, help="Also write a Graphviz DOT file")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the ``graphopt`` command."""
    parser = argparse.ArgumentParser(
        prog="graphopt",
        description="Run combinatorial optimization algorithms on a graph file.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{euler,matching,hungarian,color,tsp,knapsack}",
    )

    euler_parser = subparsers.add_parser("euler", help="Find an Eulerian circuit")
    _add_graph_args(euler_parser)
    euler_parser.set_defaults(handler=_cmd_euler)

    matching_parser = subparsers.add_parser("matching", help="Maximum bipartite matching")
    _add_graph_args(matching_parser)
    matching_parser.add_argument(
        "--left", type=int, nargs="+", default=None, help="Explicit left partition"
    )
    matching_parser.add_argument(
        "--warm-start",
        action="store_true",
        help="Seed the matching with edges of weight > 1 from the file",
    )
    matching_parser.set_defaults(handler=_cmd_matching)

    hungarian_parser = subparsers.add_parser("hungarian", help="Minimum-cost assignment")
    _add_graph_args(hungarian_parser)
    hungarian_parser.set_defaults(handler=_cmd_hungarian)

    color_parser = subparsers.add_parser("color", help="Vertex coloring")
    _add_graph_args(color_parser)
    color_parser.set_defaults(handler=_cmd_color)

    tsp_parser = subparsers.add_parser("tsp", help="Traveling salesman tour")
    _add_graph_args(tsp_parser)
    tsp_parser.add_argument("--method", choices=sorted(_TSP_METHODS), default="exact")
    tsp_parser.add_argument("--seed", type=int, default=None, help="Seed for the genetic method")
    defaults = GeneticConfig()
    tsp_parser.add_argument("--population", type=int, default=defaults.population_size)
    tsp_parser.add_argument("--generations", type=int, default=defaults.generations)
    tsp_parser.add_argument("--mutation-rate", type=float, default=defaults.mutation_rate)
    tsp_parser.add_argument("--tournament-size", type=int, default=defaults.tournament_size)
    tsp_parser.set_defaults(handler=_cmd_tsp)

    knapsack_parser = subparsers.add_parser("knapsack", help="0/1 knapsack")
    knapsack_parser.add_argument("--values", type=float, nargs="+", required=True)
    knapsack_parser.add_argument("--weights", type=float, nargs="+", required=True)
    knapsack_parser.add_argument("--capacity", type=float, required=True)
    knapsack_parser.set_defaults(handler=_cmd_knapsack)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``graphopt`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = build_parser()
    effective_args = sys.argv[1:] if argv is None else argv
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    _run(args.command, args.handler, args)

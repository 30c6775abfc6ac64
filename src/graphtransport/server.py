from __future__ import annotations

import os
import sys

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from .logging_config import setup_logging
from .schemas import LPProblem, SolveOptions, TransportMethod, TransportProblem
from .service import (
    compare_methods_request,
    parse_graphical_request,
    solve_graphical_request,
    solve_transport_request,
)

app = FastMCP("Graph Transport Solver")


@app.tool()
def solve_graphical_lp(problem: LPProblem, options: SolveOptions | None = None) -> dict:
    """Solve a two-variable LP with the graphical method (vertices, feasible region, optimum)."""
    return solve_graphical_request(problem, options)


@app.tool()
def parse_graphical_lp(spec: str) -> dict:
    """Parse text such as 'maximize 3x1 + 5x2 subject to x1 <= 4, ...' into LPProblem JSON."""
    return parse_graphical_request(spec)


@app.tool()
def solve_transportation_problem(
    problem: TransportProblem,
    method: TransportMethod = "vogel",
    options: SolveOptions | None = None,
) -> dict:
    """
    Build an initial basic feasible solution for a transportation problem.

    Unequal supply and demand are balanced with a zero-cost dummy source or destination.

    Args:
        problem: Supply vector, demand vector, cost matrix and optional names.
        method: 'northwest_corner', 'least_cost' or 'vogel' (default).
        options: Optional tolerances.

    Returns:
        Envelope with 'status', 'message' and 'data' (allocations, total cost, balance info).
    """
    return solve_transport_request(problem, method, options)


@app.tool()
def compare_transportation_methods(problem: TransportProblem, options: SolveOptions | None = None) -> dict:
    """Run Northwest Corner, Least Cost and Vogel on the same problem and report each cost."""
    return compare_methods_request(problem, options)


def main() -> None:
    setup_logging(os.environ.get("GRAPHTRANSPORT_LOG_LEVEL", "INFO"))

    transport = os.environ.get("MCP_TRANSPORT", "stdio")
    if transport == "stdio" or "--stdio" in sys.argv:
        app.run(transport="stdio")
    else:
        port = int(os.environ.get("PORT", "8081"))
        app.settings.host = "0.0.0.0"
        app.settings.port = port
        app.settings.streamable_http_path = "/mcp"
        app.settings.transport_security = TransportSecuritySettings(
            enable_dns_rebinding_protection=False,
            allowed_hosts=["*"],
            allowed_origins=["*"],
        )
        app.run(transport="streamable-http")


if __name__ == "__main__":
    main()

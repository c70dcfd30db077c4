# =============================================================================
# dumpling_mcp/code_tools.py  —  Sandboxed Code Execution
# =============================================================================
# run-js-code and run-python-code.  The code runs in Dumpling's sandbox,
# never in this process.
# =============================================================================

from typing import Annotated, Optional

from fastmcp import FastMCP
from pydantic import Field

from dumpling_mcp.server import RUNS_CODE, UpstreamGateway


Code = Annotated[str, Field(description="Source code to run.")]
Timeout = Annotated[Optional[float], Field(ge=0, description="Execution time limit.")]
Memory = Annotated[Optional[float], Field(ge=0, description="Memory limit.")]


def register(mcp: FastMCP, gateway: UpstreamGateway) -> None:
    @mcp.tool(name="run-js-code", annotations=RUNS_CODE)
    async def run_js_code(
        code: Code,
        dependencies: Annotated[
            Optional[dict[str, str]],
            Field(description="npm packages to install, as {name: version}."),
        ] = None,
        timeout: Timeout = None,
        memory: Memory = None,
    ) -> str:
        """Run JavaScript in a sandbox.

        Returns result, console output, executionTime and error (if any).
        """
        return await gateway.call(
            "run-js-code",
            "run JavaScript code",
            {"code": code, "dependencies": dependencies, "timeout": timeout, "memory": memory},
        )

    @mcp.tool(name="run-python-code", annotations=RUNS_CODE)
    async def run_python_code(
        code: Code,
        dependencies: Annotated[
            Optional[list[str]], Field(description="pip packages to install.")
        ] = None,
        timeout: Timeout = None,
        memory: Memory = None,
        saveOutputFiles: Annotated[
            Optional[bool], Field(description="Keep files the code writes and return links to them.")
        ] = None,
    ) -> str:
        """Run Python in a sandbox.

        Returns result, stdout, stderr, executionTime and outputFiles.
        """
        return await gateway.call(
            "run-python-code",
            "run Python code",
            {
                "code": code,
                "dependencies": dependencies,
                "timeout": timeout,
                "memory": memory,
                "saveOutputFiles": saveOutputFiles,
            },
        )

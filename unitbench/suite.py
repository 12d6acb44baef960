"""Load benchmark suites from Python files.

A suite file either defines ``register(bench)``, which adds units to the
Benchmark it is given, or builds its own Benchmark at module level under the
name ``benchmark`` or ``bench``.
"""

import importlib.util
import logging
from pathlib import Path
from typing import Optional, Union

from unitbench.configs.defaults import RunnerConfig
from unitbench.runners.benchmark_runner import Benchmark
from unitbench.utils.errors import SuiteLoadError


LOGGER = logging.getLogger(__name__)

BENCHMARK_NAMES = ("benchmark", "bench")


def load_suite(path: Union[str, Path], config: Optional[RunnerConfig] = None) -> Benchmark:
    """Import a suite file and return the Benchmark it defines.

    Args:
        path: Path to the suite's .py file
        config: If given, applied to the returned Benchmark

    Raises:
        SuiteLoadError: If the file cannot be imported or defines no units
    """
    suite_path = Path(path)
    if not suite_path.is_file():
        raise SuiteLoadError(f"Suite file not found: {suite_path}")

    spec = importlib.util.spec_from_file_location(f"unitbench_suite_{suite_path.stem}", suite_path)
    if spec is None or spec.loader is None:
        raise SuiteLoadError(f"Cannot import suite file: {suite_path}")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise SuiteLoadError(f"Error importing suite {suite_path}: {e}") from e

    register = getattr(module, "register", None)
    if callable(register):
        bench = Benchmark()
        register(bench)
    else:
        bench = next(
            (
                getattr(module, name)
                for name in BENCHMARK_NAMES
                if isinstance(getattr(module, name, None), Benchmark)
            ),
            None,
        )
        if bench is None:
            raise SuiteLoadError(
                f"Suite {suite_path} must define register(bench) or a Benchmark named "
                + " or ".join(BENCHMARK_NAMES)
            )

    if not bench.units:
        raise SuiteLoadError(f"Suite {suite_path} registers no units")
    if config is not None:
        bench.apply_config(config)
    LOGGER.debug("Loaded %d units from %s", len(bench.units), suite_path)
    return bench

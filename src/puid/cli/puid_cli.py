"""Print identifiers, or measure generation throughput."""

import logging
import sys
import time
from typing import TextIO

from puid.core.errors import PuidError
from puid.core.generator import IdGenerator

from .config import CLIConfig

logger = logging.getLogger(__name__)


class PuidCLI:
    """Runs one CLI invocation against a generator."""

    def __init__(
        self,
        config: CLIConfig,
        generator: IdGenerator,
        output_stream: TextIO = sys.stdout,
        error_stream: TextIO = sys.stderr,
    ):
        self.config = config
        self.generator = generator
        self.output_stream = output_stream
        self.error_stream = error_stream

    def run(self) -> int:
        """Return the process exit status."""
        try:
            if self.config.bench is not None:
                self._bench(self.config.prefixes[0], self.config.bench)
            else:
                self._print_ids()
        except PuidError as exc:
            self.error_stream.write(f"puid: {exc}\n")
            return 2
        return 0

    def _print_ids(self) -> None:
        # Reject the whole batch before writing anything.
        for prefix in self.config.prefixes:
            self.generator.validate_prefix(prefix)
        if self.config.entropy is not None:
            self.generator.validate_entropy(self.config.entropy)

        for prefix in self.config.prefixes:
            for _ in range(self.config.count):
                self.output_stream.write(
                    self.generator.generate(prefix, self.config.entropy) + "\n"
                )

    def _bench(self, prefix: str, iterations: int) -> None:
        generate = self.generator.generate
        entropy = self.config.entropy
        start = time.perf_counter()
        for _ in range(iterations):
            generate(prefix, entropy)
        elapsed = time.perf_counter() - start
        logger.debug("Benchmark finished in %.3fs", elapsed)
        rate = iterations / elapsed if elapsed > 0 else float("inf")
        self.output_stream.write(
            f"{iterations} ids in {elapsed:.3f}s "
            f"({rate:,.0f} ids/s, {elapsed / iterations * 1e6:.2f} us/id)\n"
        )

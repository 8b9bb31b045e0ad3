"""
Markdown renderer for aggregated test results.
"""

import html
import io
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Sequence, TextIO

from ..addons.base import Addon
from ..config import CiEnvironment, ReportOptions
from ..exceptions import AddonError
from ..models import Summary, TestEvent, TestFailed, TestStarted
from .formatting import make_anchor, readable_duration

logger = logging.getLogger(__name__)

UNKNOWN = "*unknown*"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MarkdownRenderer:
    """Write the report sections to a text stream.

    The document is laid out as front-matter, summary table, addon
    fragments and job link, followed by the test index and the details.
    """

    def __init__(
        self,
        write: TextIO,
        options: ReportOptions,
        environment: Optional[CiEnvironment] = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.write = write
        self.options = options
        self.environment = environment or CiEnvironment()
        self.clock = clock

    def _line(self, text: str = "") -> None:
        self.write.write(text)
        self.write.write("\n")

    def duration(self, exec_time: timedelta) -> str:
        return readable_duration(exec_time, self.options.precise)

    def render(
        self,
        summary: Optional[Summary],
        test_count: Optional[int],
        tests: Sequence[TestEvent],
    ) -> None:
        """
        Render the complete document.

        Args:
            summary: Aggregated suite summary, or None if no suite completed
            test_count: Total number of tests announced by the suites
            tests: Test events in the order they were encountered

        Raises:
            AddonError: If a required addon fails
            OSError: If writing to the stream fails
        """
        if summary is not None:
            self.write_header(summary, test_count)
        if not self.options.summary_only:
            self.render_index(tests)
            self.render_details(tests)

    def write_front_matter(self, summary: Summary) -> None:
        date = self.clock()
        run_id = self.environment.run_id or UNKNOWN
        title = f"{summary.outcome.glyph} Test Result {run_id}"

        self._line("---")
        self._line(f'title: "{title}"')
        self._line(f"date: {date.isoformat()}")
        self._line("categories: test-report")
        self._line("excerpt_separator: <!--more-->")
        self._line("---")
        self._line()

    def write_summary_table(self, summary: Summary, test_count: Optional[int]) -> None:
        total = str(test_count) if test_count is not None else UNKNOWN

        self._line()
        self._line("| | Total | Passed | Failed | Ignored | Filtered | Duration |")
        self._line("| --- | ----- | -------| ------ | ------- | -------- | -------- |")
        self._line(
            f"| {summary.outcome.glyph} | {total} | {summary.passed} | {summary.failed} "
            f"| {summary.ignored} | {summary.filtered_out} | {self.duration(summary.exec_time)} |"
        )
        self._line()

    def render_addon(self, addon: Addon) -> None:
        """Render one addon, dropping the fragment if an optional addon fails."""
        buffer = io.StringIO()
        try:
            addon.render(buffer)
        except Exception as e:
            if addon.required:
                if isinstance(e, AddonError):
                    raise
                raise AddonError(addon.name, e) from e
            logger.debug("Skipping optional addon %s: %s", addon.name, e)
            return

        self.write.write(buffer.getvalue())
        self._line()

    def write_header(self, summary: Summary, test_count: Optional[int]) -> None:
        if not self.options.disable_front_matter:
            self.write_front_matter(summary)

        self.write_summary_table(summary, test_count)
        self._line()

        for addon in self.options.addons:
            self.render_addon(addon)

        link = self.environment.job_url
        if link:
            self._line(f"**Job:** [{link}]({link})")
            self._line()

    def render_index(self, tests: Sequence[TestEvent]) -> None:
        self._line("<!--more-->")
        self._line()
        self._line("# Index")
        self._line()
        self._line("| Name | Result | Duration |")
        self._line("| ---- | ------ | -------- |")

        for test in tests:
            if isinstance(test, TestStarted):
                continue
            link = f"[{test.name}](#{make_anchor(test.name)})"
            self._line(f"| {link} | {test.outcome.glyph} | {self.duration(test.exec_time)} |")

    def render_details(self, tests: Sequence[TestEvent]) -> None:
        self._line()
        self._line()
        self._line("# Details")

        for test in tests:
            if isinstance(test, TestStarted):
                continue
            anchor = make_anchor(test.name)
            self._line()
            self._line(f'## {test.outcome.glyph} {test.name} <a id="{anchor}"></a>')
            self._line()
            self._line(f"**Duration**: {self.duration(test.exec_time)}")

            if isinstance(test, TestFailed) and test.stdout:
                self._line()
                self._line("<details>")
                self._line()
                self._line("<summary>Test output</summary>")
                self._line()
                self._line("<pre>")
                self._line(html.escape(test.stdout))
                self._line("</pre>")
                self._line()
                self._line("</details>")

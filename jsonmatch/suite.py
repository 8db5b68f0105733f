"""Dataset suite runner: compares the document pairs stored in case files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from .engine import JsonMatchEngine
from .exceptions import ConfigError, DecodeError
from .jsonpath_utils import JSONPathMatcher
from .models import DiffOptions, Difference, load_config_file
from .parser import loads

logger = logging.getLogger(__name__)


@dataclass
class SuiteConfig:
    """Where to find the documents and the expectation inside each case file."""
    first_path: str = "$.first"
    second_path: str = "$.second"
    expected_result_field: str = "expected_result"
    documents_as_text: bool = False

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> 'SuiteConfig':
        """Build the config from the 'suite' section of an options file."""
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("'suite' section must be a mapping",
                              {"type": type(data).__name__})

        known = {"first_path", "second_path", "expected_result_field", "documents_as_text"}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown suite keys: {sorted(unknown)}",
                              {"keys": sorted(unknown)})

        for name in ("first_path", "second_path", "expected_result_field"):
            if name in data and not isinstance(data[name], str):
                raise ConfigError(f"Suite option '{name}' must be a string",
                                  {"type": type(data[name]).__name__})
        if "documents_as_text" in data and not isinstance(data["documents_as_text"], bool):
            raise ConfigError("Suite option 'documents_as_text' must be a boolean",
                              {"type": type(data["documents_as_text"]).__name__})

        config = cls(**data)
        # Fail early on bad expressions rather than once per case
        JSONPathMatcher.compile(config.first_path)
        JSONPathMatcher.compile(config.second_path)
        return config


@dataclass
class CaseResult:
    """Result of a single case file."""
    name: str
    dataset_path: str
    passed: bool
    difference: Optional[Difference] = None
    expected: Optional[Difference] = None
    message: str = ""
    error: Optional[str] = None

    def to_dict(self) -> dict:
        result = {
            "name": self.name,
            "dataset_path": self.dataset_path,
            "passed": self.passed,
        }
        if self.difference is not None:
            result["difference"] = self.difference.name
        if self.expected is not None:
            result["expected"] = self.expected.name
        if self.message:
            result["message"] = self.message
        if self.error:
            result["error"] = self.error
        return result


@dataclass
class SuiteReport:
    """Report across all case files of a folder."""
    total: int = 0
    passed: int = 0
    failed: int = 0
    cases: list[CaseResult] = field(default_factory=list)
    breakdown: dict[str, list[str]] = field(default_factory=dict)
    timestamp: str = ""

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
        if not self.breakdown:
            self.breakdown = {d.name: [] for d in Difference}
            self.breakdown["ERROR"] = []

    def add(self, result: CaseResult):
        self.cases.append(result)
        self.total += 1
        if result.passed:
            self.passed += 1
        else:
            self.failed += 1

        if result.difference is not None:
            self.breakdown[result.difference.name].append(result.name)
        else:
            self.breakdown["ERROR"].append(result.name)

    def to_dict(self) -> dict:
        pass_rate = f"{(self.passed / self.total * 100):.1f}%" if self.total > 0 else "0.0%"
        return {
            "timestamp": self.timestamp,
            "summary": {
                "total_cases": self.total,
                "passed": self.passed,
                "failed": self.failed,
                "pass_rate": pass_rate
            },
            "breakdown": {k: v for k, v in self.breakdown.items() if v},
            "cases": [c.to_dict() for c in self.cases]
        }

    def print_summary(self):
        pass_rate = f"{(self.passed / self.total * 100):.1f}%" if self.total > 0 else "0.0%"
        print(f"\nCase Results: {self.passed}/{self.total} passed ({pass_rate})")
        if self.failed > 0:
            print(f"  Failed: {self.failed}")

        for name, cases in self.breakdown.items():
            if cases:
                print(f"  {name}: {len(cases)} cases")


class SuiteRunner:
    """
    Runs the case files of a folder against one set of options.

    A case file is a JSON object holding the two documents and,
    optionally, the expected classification name:

        {
            "name": "order totals",
            "first": {"id": 1, "total": 10.50, "note": "x"},
            "second": {"id": 1, "total": 10.50},
            "expected_result": "SupersetMatch"
        }

    Without an expectation, a case passes on a full or superset match.
    """

    def __init__(
        self,
        options: Optional[DiffOptions] = None,
        config: Optional[SuiteConfig] = None
    ):
        self.engine = JsonMatchEngine(options)
        self.config = config or SuiteConfig()

    @classmethod
    def from_file(cls, options_path: str | Path) -> 'SuiteRunner':
        """Build a runner from a YAML/JSON options file with an optional 'suite' section."""
        data = load_config_file(options_path)
        config = SuiteConfig.from_dict(data.get("suite"))
        return cls(DiffOptions.from_dict(data), config)

    def run_case(self, dataset: Any, name: str, dataset_path: str) -> CaseResult:
        """Run a single decoded case."""
        try:
            first = JSONPathMatcher.find_one(dataset, self.config.first_path)
            second = JSONPathMatcher.find_one(dataset, self.config.second_path)

            expected = None
            if isinstance(dataset, dict) and self.config.expected_result_field in dataset:
                expected = Difference.from_name(str(dataset[self.config.expected_result_field]))

            if self.config.documents_as_text:
                for path, document in ((self.config.first_path, first),
                                       (self.config.second_path, second)):
                    if not isinstance(document, str):
                        raise ValueError(f"{path} must hold JSON text, got {type(document).__name__}")
                difference, message = self.engine.compare(first, second)
            else:
                difference, message = self.engine.compare_values(first, second)
        except (KeyError, ValueError) as e:
            logger.debug("Case %s is malformed: %s", name, e)
            return CaseResult(name=name, dataset_path=dataset_path, passed=False, error=str(e))
        except DecodeError as e:
            logger.debug("Case %s is malformed: %s", name, e.message)
            return CaseResult(name=name, dataset_path=dataset_path, passed=False, error=e.message)

        if expected is not None:
            passed = difference == expected
        else:
            passed = difference.is_match

        logger.debug("Case %s: %s (%s)", name, difference.name, "pass" if passed else "fail")
        return CaseResult(
            name=name,
            dataset_path=dataset_path,
            passed=passed,
            difference=difference,
            expected=expected,
            message=message
        )

    def run_folder(self, folder: str | Path, print_report: bool = True) -> SuiteReport:
        """Run all case files in a folder."""
        report = SuiteReport()
        folder_path = Path(folder)

        for dataset_file in sorted(folder_path.glob("*.json")):
            dataset_path = str(dataset_file)
            try:
                dataset = loads(dataset_file.read_bytes())
            except DecodeError as e:
                result = CaseResult(
                    name=dataset_file.stem,
                    dataset_path=dataset_path,
                    passed=False,
                    error=e.message
                )
            else:
                name = dataset_file.stem
                if isinstance(dataset, dict) and isinstance(dataset.get("name"), str):
                    name = dataset["name"]
                result = self.run_case(dataset, name, dataset_path)

            report.add(result)
            if print_report:
                print(f"{'PASS' if result.passed else 'FAIL'}: {result.name}")
                if not result.passed and result.message:
                    print(result.message)

        if print_report:
            report.print_summary()

        return report


def run_suite(
    options_path: str | Path,
    test_folder: str | Path,
    print_report: bool = True
) -> SuiteReport:
    """
    Run case files from a folder using an options file.

        from jsonmatch.suite import run_suite
        report = run_suite("options.yaml", "cases/")

    Args:
        options_path: Path to YAML/JSON options file
        test_folder: Path to folder containing case JSON files
        print_report: Whether to print the summary report

    Returns:
        SuiteReport with all results
    """
    if not Path(test_folder).exists():
        raise FileNotFoundError(f"Case folder not found: {test_folder}")
    runner = SuiteRunner.from_file(options_path)
    return runner.run_folder(test_folder, print_report=print_report)

"""
RuleTransform - routes records with declarative YAML rules.

Records passing every error-severity rule go to success; the rest go to
failure with ``rule.failures`` listing the failed rule names. Failed
warning-severity rules are listed in ``rule.warnings`` without affecting
routing.
"""

from script_tester.core.models import FAILURE, SUCCESS, RunConfiguration
from script_tester.core.transforms.base import Transform
from script_tester.core.transforms.rule_config import RuleConfigLoader
from script_tester.core.transforms.rule_engine import RuleEngine
from script_tester.core.transforms.session import ProcessSession
from script_tester.observability.logger import get_logger


logger = get_logger(__name__)

FAILURES_ATTRIBUTE = "rule.failures"
WARNINGS_ATTRIBUTE = "rule.warnings"


class RuleTransform(Transform):
    """
    Evaluates one record per trigger against a rule file.
    """

    def __init__(self):
        super().__init__()
        self.engine: RuleEngine | None = None

    @property
    def dialect(self) -> str:
        return "rules"

    def setup(self, config: RunConfiguration) -> None:
        if config.module_paths:
            logger.debug("Module paths are ignored by the rules dialect")
        rule_set = RuleConfigLoader(config.script_path).load()
        self.engine = RuleEngine(rule_set)
        logger.debug(f"Loaded rules: {self.engine.get_rule_summary()}")

    def on_trigger(self, session: ProcessSession) -> None:
        record = session.get()
        if record is None:
            return

        evaluation = self.engine.evaluate(record)

        stamped = dict(self.engine.rule_set.attributes)
        if evaluation.failed_rules:
            stamped[FAILURES_ATTRIBUTE] = ",".join(evaluation.failed_rules)
        if evaluation.warnings:
            stamped[WARNINGS_ATTRIBUTE] = ",".join(evaluation.warnings)
        if stamped:
            record = session.put_all_attributes(record, stamped)

        for message in evaluation.messages:
            logger.debug(f"{record}: {message}")

        session.transfer(record, SUCCESS if evaluation.passed else FAILURE)

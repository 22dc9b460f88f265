"""
Reporter
Collects schema initialization results and writes a JSON report
"""

import json
from datetime import datetime


class Reporter:
    """Generates bootstrap reports"""

    def __init__(self, output_file):
        """
        Initialize reporter

        Args:
            output_file: Path to save JSON report
        """
        self.output_file = output_file
        self.start_time = datetime.now()

        self.final_state = None
        self.error = None
        self.steps = []

    def add_initializer_results(self, initializer, error=None):
        """
        Take the outcome of one prepare() pass

        Args:
            initializer: SchemaInitializer that ran
            error: Exception raised by prepare(), if any
        """
        self.final_state = initializer.state.value
        self.steps = list(initializer.results)
        self.error = str(error) if error else None

    @property
    def executed_steps(self):
        return len(self.steps)

    @property
    def failed_steps(self):
        return sum(1 for s in self.steps if s['status'] == 'FAILED')

    @property
    def passed(self):
        return self.error is None and self.failed_steps == 0

    def build_report(self):
        end_time = datetime.now()
        execution_time = (end_time - self.start_time).total_seconds()

        return {
            'summary': {
                'final_state': self.final_state,
                'passed': self.passed,
                'executed_steps': self.executed_steps,
                'failed_steps': self.failed_steps,
                'error': self.error,
                'execution_time_seconds': round(execution_time, 2),
                'timestamp': end_time.isoformat()
            },
            'failures': [s for s in self.steps if s['status'] == 'FAILED'],
            'steps': self.steps
        }

    def generate_report(self):
        """
        Generate and save the report as JSON

        Returns:
            dict: The saved report
        """
        report = self.build_report()
        with open(self.output_file, 'w', encoding='utf-8') as f:
            json.dump(report, f, indent=2)
        return report

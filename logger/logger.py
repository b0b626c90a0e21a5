import json
import os
from datetime import datetime, timezone


class JSONLogger:
    """
    Appends JSON-lines records for simulator runs.

    Run summaries go to ``<prefix><day>.jsonl``; step traces and failures get
    their own files for the same UTC day.
    """

    def __init__(self, output_directory="logs/", log_file_prefix="turing_"):
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        os.makedirs(self.output_directory, exist_ok=True)
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self.path_for(self.log_file_prefix)

    def path_for(self, prefix):
        return os.path.join(self.output_directory, f"{prefix}{self.today}.jsonl")

    @staticmethod
    def _stamp(entry):
        return {"timestamp": datetime.now(timezone.utc).isoformat(), **entry}

    def log_batch(self, entries: list, path=None):
        """Append entries to ``path`` (the run log by default); returns the path."""
        path = path or self.current_log
        with open(path, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(entry) + "\n")
        return path

    def log_run(self, summary: dict):
        """Log the summary of one finished (or stopped) run."""
        return self.log_batch([self._stamp({"event": "run", **summary})])

    def log_steps(self, results: list):
        """Log a step trace; accepts StepResult objects or plain dicts."""
        entries = [r.to_dict() if hasattr(r, "to_dict") else r for r in results]
        return self.log_batch(entries, self.path_for("steps_"))

    def log_failure(self, entry: dict):
        """Log a run that stopped on an engine error."""
        return self.log_batch([self._stamp(entry)], self.path_for("failures_"))

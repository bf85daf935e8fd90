from __future__ import annotations

import json
import os
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]


class TestAddAppointmentToolContract(unittest.TestCase):
    def _run(self, *args: str) -> subprocess.CompletedProcess:
        env = os.environ.copy()
        env["PYTHONPATH"] = str(REPO_ROOT)
        cmd = [sys.executable, "-m", "nexuscal.tools.add_appointment", *args]
        return subprocess.run(cmd, cwd=str(REPO_ROOT), env=env, capture_output=True, text=True)

    def test_adds_with_defaults_guests_and_meet_link(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            store = Path(td) / "storage.json"
            r = self._run("--store", str(store), "--date", "2024-03-05", "--time", "14:00",
                          "--title", "Call Maria", "--type", "call", "--guest", "maria", "--meet", "--json")
            self.assertEqual(r.returncode, 0, r.stderr)
            rec = json.loads(r.stdout)
            self.assertEqual(rec["endTime"], "15:00")
            self.assertEqual(rec["guests"], ["2"])
            self.assertEqual(rec["contactId"], "2")
            self.assertRegex(rec["meetLink"], r"^meet\.google\.com/[a-z]{3}-[a-z]{4}-[a-z]{3}$")

            doc = json.loads(store.read_text(encoding="utf-8"))
            ids = [a["id"] for a in doc["crm_appointments"]]
            self.assertEqual(len(ids), 2)  # seeded demo + new
            self.assertEqual(ids[-1], rec["id"])

    def test_repeated_guest_name_is_added_once(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            store = Path(td) / "storage.json"
            r = self._run("--store", str(store), "--date", "2024-03-05", "--json",
                          "--guest", "carlos", "--guest", "Carlos Ruiz", "--guest", "juan")
            self.assertEqual(r.returncode, 0, r.stderr)
            self.assertEqual(json.loads(r.stdout)["guests"], ["1", "3"])

    def test_blank_title_placeholder(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            store = Path(td) / "storage.json"
            r = self._run("--store", str(store), "--date", "2024-03-05", "--json")
            self.assertEqual(r.returncode, 0, r.stderr)
            rec = json.loads(r.stdout)
            self.assertEqual(rec["title"], "(No title)")
            self.assertEqual((rec["time"], rec["endTime"]), ("09:00", "10:00"))

    def test_errors(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            store = Path(td) / "storage.json"
            r = self._run("--store", str(store), "--date", "2024-3-5")
            self.assertEqual(r.returncode, 2)
            self.assertIn("[nexuscal-add] ERROR:", r.stderr)

            r = self._run("--store", str(store), "--date", "2024-03-05", "--guest", "nobody")
            self.assertEqual(r.returncode, 2)
            self.assertIn("No contact matches", r.stderr)

            # "r" matches all three seeded contacts
            r = self._run("--store", str(store), "--date", "2024-03-05", "--guest", "r")
            self.assertEqual(r.returncode, 2)
            self.assertIn("Ambiguous", r.stderr)


if __name__ == "__main__":
    unittest.main(verbosity=2)

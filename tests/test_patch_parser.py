"""Tests for unified diff parsing."""

from src.services.reviewer.patch_parser import iter_added_lines, parse_patch_line_numbers

PATCH = """@@ -1,4 +1,5 @@
 import os
-import sys
+import json
+import re
 
 def main():
@@ -20,2 +21,3 @@ def helper():
     pass
+    return None
\\ No newline at end of file"""


class TestIterAddedLines:
    def test_tracks_new_file_line_numbers(self):
        """Added lines carry their line number in the new file."""
        assert iter_added_lines(PATCH) == [
            (2, "import json"),
            (3, "import re"),
            (22, "    return None"),
        ]

    def test_empty_patch(self):
        """No patch means no added lines."""
        assert iter_added_lines(None) == []
        assert iter_added_lines("") == []

    def test_ignores_lines_before_first_hunk(self):
        """File headers are not content."""
        patch = "--- a/x.py\n+++ b/x.py\n@@ -0,0 +1 @@\n+print('hi')"
        assert iter_added_lines(patch) == [(1, "print('hi')")]


class TestParsePatchLineNumbers:
    def test_returns_added_line_set(self):
        assert parse_patch_line_numbers(PATCH) == {2, 3, 22}

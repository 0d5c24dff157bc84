"""Tests for environment descriptors."""
import json
import os

import pytest

from install.descriptor import apply_descriptor, describe, render
from install.models import InstallationRecord


def _record(tmp_path, *dirs):
    root = tmp_path / "pkg" / "1.0"
    root.mkdir(parents=True)
    for d in dirs:
        (root / d).mkdir(parents=True)
    return InstallationRecord("pkg", "1.0", str(root))


class TestDescribe:
    """Descriptor derivation from the installed prefix."""

    def test_bin_only_has_no_library_entry(self, tmp_path):
        record = _record(tmp_path, "bin")
        assert describe(record) == {"PATH": os.path.join(record.root, "bin")}

    def test_full_layout(self, tmp_path):
        record = _record(
            tmp_path,
            "bin",
            "lib/python3.11/site-packages",
            "lib64/python3.11/site-packages",
            "share/man",
        )
        descriptor = describe(record)
        assert list(descriptor) == ["PATH", "PYTHONPATH", "MANPATH"]
        assert descriptor["PYTHONPATH"].split(os.pathsep) == [
            os.path.join(record.root, "lib", "python3.11", "site-packages"),
            os.path.join(record.root, "lib64", "python3.11", "site-packages"),
        ]
        assert descriptor["MANPATH"] == os.path.join(record.root, "share", "man")

    def test_lib_without_site_packages_is_omitted(self, tmp_path):
        record = _record(tmp_path, "lib/python3.11")
        assert describe(record) == {}

    def test_missing_prefix(self, tmp_path):
        record = InstallationRecord("pkg", "1.0", str(tmp_path / "absent"))
        assert describe(record) == {}

    def test_recomputed_on_demand(self, tmp_path):
        record = _record(tmp_path)
        assert describe(record) == {}
        os.mkdir(os.path.join(record.root, "bin"))
        assert "PATH" in describe(record)


class TestApplyDescriptor:
    """Prepending onto an environment mapping."""

    def test_prepends_and_preserves_input(self):
        environ = {"PATH": "/usr/bin", "HOME": "/root"}
        result = apply_descriptor({"PATH": "/opt/pkg/bin", "PYTHONPATH": "/opt/pkg/site"}, environ)
        assert result["PATH"] == "/opt/pkg/bin" + os.pathsep + "/usr/bin"
        assert result["PYTHONPATH"] == "/opt/pkg/site"
        assert result["HOME"] == "/root"
        assert environ == {"PATH": "/usr/bin", "HOME": "/root"}

    def test_empty_existing_value(self):
        assert apply_descriptor({"PATH": "/a"}, {"PATH": ""}) == {"PATH": "/a"}

    def test_unset_manpath_keeps_system_default(self):
        result = apply_descriptor({"MANPATH": "/opt/pkg/share/man"}, {})
        assert result["MANPATH"] == "/opt/pkg/share/man" + os.pathsep

    def test_set_manpath_is_prepended(self):
        result = apply_descriptor({"MANPATH": "/opt/pkg/share/man"}, {"MANPATH": "/usr/share/man"})
        assert result["MANPATH"] == "/opt/pkg/share/man" + os.pathsep + "/usr/share/man"


class TestRender:
    """Output formats."""

    DESCRIPTOR = {"PATH": "/opt/pkg/1.0/bin", "PYTHONPATH": "/opt/pkg/1.0/lib/python3.11/site-packages"}
    RECORD = InstallationRecord("pkg", "1.0", "/opt/pkg/1.0")

    def test_sh(self):
        text = render(self.DESCRIPTOR, "sh")
        assert text.splitlines()[0] == 'export PATH=/opt/pkg/1.0/bin"${PATH:+:$PATH}"'

    def test_sh_quotes_spaces(self):
        text = render({"PATH": "/opt/my pkg/bin"}, "sh")
        assert text == "export PATH='/opt/my pkg/bin'\"${PATH:+:$PATH}\""

    def test_csh(self):
        text = render({"PATH": "/opt/pkg/1.0/bin"}, "csh")
        assert "if ($?PATH) then" in text
        assert 'setenv PATH /opt/pkg/1.0/bin":${PATH}"' in text
        assert "    setenv PATH /opt/pkg/1.0/bin\n" in text

    def test_sh_manpath_keeps_system_default(self):
        text = render({"MANPATH": "/opt/pkg/1.0/share/man"}, "sh")
        assert text == 'export MANPATH=/opt/pkg/1.0/share/man":${MANPATH}"'

    def test_csh_manpath_keeps_system_default(self):
        text = render({"MANPATH": "/opt/pkg/1.0/share/man"}, "csh")
        assert 'setenv MANPATH /opt/pkg/1.0/share/man":${MANPATH}"' in text
        assert 'else\n    setenv MANPATH /opt/pkg/1.0/share/man":"\n' in text

    def test_json(self):
        assert json.loads(render(self.DESCRIPTOR, "json")) == self.DESCRIPTOR

    def test_modulefile(self):
        text = render(self.DESCRIPTOR, "modulefile", self.RECORD)
        lines = text.splitlines()
        assert lines[0] == "#%Module1.0"
        assert 'module-whatis "pkg 1.0"' in lines
        assert "prepend-path PATH {/opt/pkg/1.0/bin}" in lines
        assert "prepend-path PYTHONPATH {/opt/pkg/1.0/lib/python3.11/site-packages}" in lines

    def test_modulefile_requires_record(self):
        with pytest.raises(ValueError):
            render(self.DESCRIPTOR, "modulefile")

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            render(self.DESCRIPTOR, "fish")

"""Shared fixtures for integration tests.

These tests exercise the real pipeline end-to-end:
    source → parse → exclusions → filter → canonical bytes

No mocks on internal components; input comes from files on disk.
"""

from __future__ import annotations

from pathlib import Path

import pytest

REMEDIATION_PLAYBOOK = """\
- name: Insights remediation
  hosts: "host1,host2"
  become: true
  vars:
    insights_signature_exclude: /hosts,/vars/insights_signature_exclude,/vars/insights_signature
    insights_signature: !!binary TFMwdExTMUNSVWRKVGlCUVIxQWdVMGxIVGtGVVZWSkZMUzB0TFMwdENnPT0=
    reboot: false
    packages: [openssl, curl]
  tasks:
    - name: Update packages
      yum:
        name: "{{ packages }}"
        state: latest
      when: ansible_os_family == "RedHat"
    - name: Reboot
      reboot: {}
      when: reboot | bool
"""


@pytest.fixture()
def remediation_yaml() -> str:
    return REMEDIATION_PLAYBOOK


@pytest.fixture()
def remediation_file(tmp_path: Path) -> Path:
    path = tmp_path / "remediation.yml"
    path.write_text(REMEDIATION_PLAYBOOK, encoding="utf-8")
    return path

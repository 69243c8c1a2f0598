"""
Site suites package.

Page-object UI regression suites for the ParaBank banking demo and the
Bilibili video site. Kept importable so `run_tests.py`, IDEs and CI can
import page objects and framework helpers directly.
"""

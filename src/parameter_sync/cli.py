"""
Command line entry point.

Runs the task namespace as a standalone program, so `parameter-sync params.apply`
works without a tasks.py in the current directory.
"""

from invoke import Program

from . import namespace

program = Program(namespace=namespace, version='0.1.0', name='parameter-sync', binary='parameter-sync')

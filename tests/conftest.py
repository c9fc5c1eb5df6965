"""This module exports fixtures shared by all tests."""

from pytest import fixture

from mockwork import reset


@fixture(autouse=True)
def unregister_mocks():
    """Forget every mock and pending stubbing after each test."""
    yield
    reset()

"""Shared fixtures."""

import pytest
from support.models import make_post
from support.presenters import CountingPresenter


@pytest.fixture
def post():
    """A post with no comments."""
    return make_post(1)


@pytest.fixture
def post_with_comments():
    """A post with three comments, not yet loaded."""
    return make_post(1, comment_count=3)


@pytest.fixture
def posts():
    """Three posts with ids 1, 2 and 3."""
    return [make_post(post_id) for post_id in (1, 2, 3)]


@pytest.fixture(autouse=True)
def reset_counting_presenter():
    CountingPresenter.calls.clear()
    yield
    CountingPresenter.calls.clear()

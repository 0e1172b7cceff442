"""Models, presenters and paginators used by the test suite."""

"""
booz test suite
===============

Test Modules
------------
- test_models.py: Tests for the Pydantic setup configuration
- test_renderer.py: Tests for the template tree walk
- test_generator.py: Tests for template resolution, commands and setup
- test_cli.py: Tests for the interactive command

Running Tests
-------------
    # Run all tests
    pytest

    # Run specific module
    pytest tests/test_renderer.py

    # Run specific test class
    pytest tests/test_renderer.py::TestTemplateFiles
"""

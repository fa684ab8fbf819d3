"""
Tests for base components
"""
import pytest
from pyonedim.core.base import OneDimComponent, ResidualComponent

def test_component_requires_implementation():
    """Test that OneDimComponent cannot be instantiated without implementation."""
    with pytest.raises(TypeError):
        OneDimComponent()

def test_residual_component_requires_eval():
    """Test that a residual component must provide eval."""
    class NoEval(ResidualComponent):
        def initialize(self):
            pass

    with pytest.raises(TypeError):
        NoEval()

def test_component_configuration():
    """Test component configuration handling."""
    class TestComponent(OneDimComponent):
        def initialize(self):
            self._initialized = True

    config = {'test': 'value'}
    component = TestComponent(config)
    assert component._config == config
    assert not component.is_initialized()
    component.initialize()
    assert component.is_initialized()

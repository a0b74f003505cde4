"""
Exception classes with built-in guidance for parameter synchronization.
"""


class ParameterSyncException(Exception):
    """Base exception for all parameter-sync errors."""
    def __init__(self, message: str, error_type: str = None, parameter_name: str = None,
                 pass_key: str = None):
        super().__init__(message)
        self.error_type = error_type
        self.parameter_name = parameter_name
        self.pass_key = pass_key
        self.guidance = self._generate_guidance()

    def _generate_guidance(self):
        """Override in subclasses to provide specific guidance."""
        return f"""
❌ Parameter sync error: {self}
💡 Check your configuration and try again
"""


class SecretRetrievalError(ParameterSyncException):
    """Raised when the local secret store process fails or cannot be started."""
    def __init__(self, message: str, pass_key: str = None, stderr: str = "", **kwargs):
        self.stderr = stderr or ""
        if self.stderr:
            message = f"{message}: {self.stderr.strip()}"
        super().__init__(message, error_type="secret_retrieval", pass_key=pass_key, **kwargs)

    def _generate_guidance(self):
        return f"""
❌ Could not read '{self.pass_key}' from the local password store
💡 Check that the entry exists and can be decrypted:
   1. pass show {self.pass_key}
   2. If the store lives elsewhere, set pass_dir for this binding (PASSWORD_STORE_DIR)
"""


class ParameterNotFoundException(ParameterSyncException):
    """Raised when a parameter does not exist in the remote parameter store."""
    def __init__(self, message: str, parameter_name: str, **kwargs):
        super().__init__(message, error_type="parameter_not_found", parameter_name=parameter_name, **kwargs)

    def _generate_guidance(self):
        return f"""
❌ Parameter '{self.parameter_name}' not found in Parameter Store
💡 Resolve this in one of the following ways:
   1. Create it from the local password store: parameter-sync params.apply
   2. Or check the name: parameter-sync params.exists {self.parameter_name}
"""


class ValidationError(ParameterSyncException):
    """Raised when region or account checks reject the provider configuration."""
    def __init__(self, message: str, field: str = None, **kwargs):
        self.field = field
        super().__init__(message, error_type="validation", **kwargs)

    def _generate_guidance(self):
        return f"""
❌ Provider validation failed: {self}
💡 Check 'provider.{self.field or "region"}' in parameter-sync.yaml or your AWS credentials
"""


class ConfigurationError(ParameterSyncException):
    """Raised when parameter-sync.yaml is missing or malformed."""
    def __init__(self, message: str, config_path: str = None, **kwargs):
        self.config_path = config_path
        super().__init__(message, error_type="configuration", **kwargs)

    def _generate_guidance(self):
        return f"""
❌ Configuration error: {self}
💡 Resolve this in one of the following ways:
   1. Create parameter-sync.yaml with 'provider' and 'bindings' sections
   2. Or point PARAMETER_SYNC_CONFIG at an existing file: export PARAMETER_SYNC_CONFIG={self.config_path or '/path/to/parameter-sync.yaml'}
"""


class StateError(ParameterSyncException):
    """Raised when the local state file cannot be read or written."""
    def __init__(self, message: str, state_path: str = None, **kwargs):
        self.state_path = state_path
        super().__init__(message, error_type="state", **kwargs)

    def _generate_guidance(self):
        return f"""
❌ State file error: {self}
💡 Check that {self.state_path or 'the state file'} is readable JSON, or move it aside and re-import bindings with parameter-sync params.import
"""

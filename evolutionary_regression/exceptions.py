class InvalidInput(ValueError):
  """Raised when an engine cannot be built from the supplied data or configuration"""

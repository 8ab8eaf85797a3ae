"""WealthWise API: signup, login and the financial assistant chatbot."""
__version__ = "0.1.0"

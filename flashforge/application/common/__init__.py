"""Common application-layer building blocks."""

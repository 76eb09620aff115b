"""Run Selenium IDE projects through an external test runner."""

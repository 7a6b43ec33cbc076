"""The pyboxer command line interface."""

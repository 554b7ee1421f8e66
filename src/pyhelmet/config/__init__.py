"""Bindable configuration property classes."""

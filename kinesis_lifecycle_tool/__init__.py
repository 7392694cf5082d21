"""Kinesis stream lifecycle tool."""

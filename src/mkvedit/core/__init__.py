"""Metadata record synchronization: text codec, tag tree reconciler and driver."""

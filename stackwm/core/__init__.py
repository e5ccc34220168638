"""
stackwm.core - Host-facing abstractions.

This package contains:
    - window   : Window, the live handle interface every host implements
    - host     : Host, window enumeration and screen geometry
    - events   : EventKind / WindowEvent, the lifecycle event model
    - rules    : Classification rules (manageable, float, default ws)
    - commands : CommandDispatcher - name -> operation registry
"""

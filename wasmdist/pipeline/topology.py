"""Fixed package topology of the distribution."""

# Primary package: owns the dispatcher and the JSX dev runtime.
REACT = "react"
# Test renderer, only built in TEST mode.
REACT_NOOP = "react-noop"
REACT_DOM = "react-dom"

JSX_RUNTIME_NAME = "jsx-dev-runtime"
INDEX_NAME = "index"

MANIFEST_FILENAME = "package.json"

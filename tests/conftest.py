"""Shared test fixtures for Bundle Insight tests."""

import json

import pytest

PREAMBLE = "var __BUNDLE_START_TIME__=this.nativePerformanceNow?nativePerformanceNow():Date.now();\n"
TRAILER = '\n__r(0);'


def register(module_id, body, path=None, deps="[]"):
    """Text of one ``__d(...)`` registration call."""
    tail = f',"{path}"' if path is not None else ""
    return f"__d(function(g,r,i,a,m,e,d){{{body}}},{module_id},{deps}{tail});\n"


@pytest.fixture
def make_module():
    """Factory for single module registration calls."""
    return register


@pytest.fixture
def make_bundle():
    """Factory joining registration calls with a preamble and entry call."""

    def _make(*modules):
        return PREAMBLE + "".join(modules) + TRAILER

    return _make


@pytest.fixture
def sample_bundle():
    """Small bundle: app code, two third-party packages, the platform runtime."""
    return (
        PREAMBLE
        + register(0, "var React=r(d[0]);m.exports=function App(){return null};", "src/App.js")
        + register(1, "m.exports={chunk:function(){}};" + "x" * 2000, "node_modules/lodash/index.js")
        + register(2, "m.exports=function(){return 'moment'};", "node_modules/moment/moment.js")
        + register(3, "m.exports={View:null};", "node_modules/react-native/index.js")
        + TRAILER
    )


@pytest.fixture
def sample_map():
    """Position map matching ``sample_bundle`` emission order."""
    return json.dumps(
        {
            "version": 3,
            "sources": [
                "/Users/dev/MyApp/src/App.js",
                "/Users/dev/MyApp/node_modules/lodash/index.js",
                "/Users/dev/MyApp/node_modules/moment/moment.js",
                "/Users/dev/MyApp/node_modules/react-native/index.js",
            ],
            "mappings": "",
        }
    )


@pytest.fixture
def rn_project(tmp_path, sample_bundle, sample_map):
    """A React Native project tree with a built iOS bundle and its map."""
    (tmp_path / "package.json").write_text(
        json.dumps(
            {
                "name": "MyApp",
                "dependencies": {
                    "react-native": "0.73.0",
                    "lodash": "^4.17.21",
                    "moment": "^2.29.4",
                    "left-pad": "^1.3.0",
                },
                "devDependencies": {"typescript": "^5.0.0", "jest": "^29.0.0"},
            }
        )
    )
    for name, version in [("lodash", "4.17.21"), ("moment", "2.29.4"), ("left-pad", "1.3.0")]:
        pkg_dir = tmp_path / "node_modules" / name
        pkg_dir.mkdir(parents=True)
        (pkg_dir / "package.json").write_text(json.dumps({"name": name, "version": version}))
        (pkg_dir / "index.js").write_text("module.exports = {};\n")

    src = tmp_path / "src"
    src.mkdir()
    (src / "App.js").write_text("export default function App() {}\n")
    (src / "Unused.tsx").write_text("export const Unused = () => null;\n")
    (src / "__tests__").mkdir()
    (src / "__tests__" / "App.test.js").write_text("test('x', () => {});\n")

    ios = tmp_path / "ios"
    ios.mkdir()
    (ios / "main.jsbundle").write_text(sample_bundle)
    (ios / "main.jsbundle.map").write_text(sample_map)
    return tmp_path

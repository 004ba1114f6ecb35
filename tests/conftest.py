import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import mathblocks
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


# Common test fixtures
@pytest.fixture
def linear_html() -> str:
    """A single linear equation."""
    return "<p>y = 2x + 1</p>"


@pytest.fixture
def heading_problem_html() -> str:
    """A problem statement under a heading, without a solution list."""
    return "<h3>Problem</h3><p>Solve for x: 2x + 3 = 7</p>"


@pytest.fixture
def lesson_html() -> str:
    """A lesson page mixing equations, problems and prose."""
    return """
    <html>
      <body>
        <h2>Straight lines</h2>
        <p>The line y = 2x + 1 has gradient 2.</p>
        <p>The parabola y = x^2 + 2x + 1 touches the x-axis once.</p>
        <p>Some relationships are harder, like y = 3*x.</p>
        <h3>Worked example</h3>
        <p id="ex1">Find the value of y when y - 4 = 6.</p>
        <ol>
          <li>Add 4 to both sides: y = 6 + 4</li>
          <li>Simplify: y = 10</li>
        </ol>
        <p>That is all for today.</p>
      </body>
    </html>
    """

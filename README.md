# graphplot

graphplot is an interactive function plotter. You type a formula in `X`,
and it draws the formula in a 600×600 pygame window. You can pan, zoom and
move the x-axis with the keyboard, and you can drop a crosshair on the
screen. The package also has a small command that times expression
evaluation.

## Installation

```
pip install .
```

This also installs pygame, which graphplot uses for the window.

## Plotting

```
graphplot
```

When the window opens, type an expression and press Enter. Backspace
deletes the last character. An expression can be at most 100 characters
long. Letter keys always enter capital letters. With Shift held, the digit
and punctuation keys give their shifted symbols (`!`, `(`, `+`, `*`, `<`,
and so on).

An expression uses the variable `X` and may contain these parts:

- numbers such as `2`, `0.5` and `1e3`
- the operators `+ - * / ^` and the comparisons `< > <= >= == !=`
  (a comparison is 1 when true and 0 when false)
- parentheses
- the functions `SIN`, `COS`, `TAN`, `LOG` (natural), `LOG10`, `EXP`,
  `SQRT` and `ABS`
- the constants `PI` and `E`

Example:

```
SIN(X) * 3 + ABS(X) / 2
```

Controls while the graph is shown:

| Key          | Action                                        |
|--------------|-----------------------------------------------|
| Left / Right | shift the view horizontally                   |
| Up / Down    | move the x-axis down / up on screen           |
| Z / X        | zoom in / zoom out                            |
| Space        | place a crosshair at the mouse position       |
| R            | enter a new expression                        |

The crosshair is a red dot with dotted guide lines to both axes.

If a point cannot be evaluated, or its value is not finite, the plot uses 0
at that point. The first evaluation error of each redraw is printed to
standard error. After you press R and enter a new expression, the program
prints `Graph reset with expression: ...` to standard output.

## Benchmarking expressions

```
graphplot-benchmark
```

Without a file argument, this command evaluates a fixed set of 17
two-variable expressions in `x` and `y` over a grid from -100 to 100. It
runs each expression once with the package's parser and once as a
hand-written Python function, then reports the time and the evaluation rate.
After that, it times how fast each expression can be compiled again and
again.

Options:

- `--delta STEP` sets the grid step (default 0.0111).
- `--parse-rounds N` sets the number of compilations per expression
  (default 100000).

Expressions for the benchmark use lower-case names: `sin`, `cos`, `tan`,
`sqrt`, `exp`, `log`, `log10`, `abs`, `min`, `max`, `clamp`, `avg`, `if`,
and the constants `pi`, `epsilon` and `inf`. A number written directly
before a name or a parenthesis, as in `2.2y^2`, means multiplication.

```
graphplot-benchmark expressions.txt [rounds]
```

With a file, the command loads one expression per line and skips blank lines
and lines that start with `#`. It then times each expression over `rounds`
evaluations (100000 by default). These expressions may also use the
variables `a b c x y z w`, the constant `e`, and the functions
`poly01` … `poly12`. `polyNN(x, c0, …, cNN)` evaluates a polynomial of
degree NN, with the coefficients given from the highest power down.

## Using the library

```python
from graphplot.expression import create_parser
from graphplot.plot import ViewState, compute_graph_points

parser = create_parser()
parser.set_expression("SIN(X) * 2")
print(parser.evaluate({"X": 1.5707963267948966}))  # 2.0

state = ViewState()
points = compute_graph_points(parser, state.phase, state.amplitude, state.y_position)
```

- `graphplot.expression.Parser` holds user-defined functions
  (`define_function`), constants (`define_constant`) and one expression
  (`set_expression`). `evaluate(variables)` evaluates that expression.
  Errors raise `ExpressionError`.
- `graphplot.plot.compute_graph_points` returns one screen point per column
  for the current view. `axis_labels` and `crosshair_pixels` give the label
  positions and the crosshair guide pixels. `ViewState.apply_keys` updates
  the pan, zoom and crosshair state from the keys that are held or pressed.
- `graphplot.textinput.ExpressionInput` collects key presses into an
  expression string. `char_for_key` maps a key code to the character it
  types.
- `graphplot.benchmark` provides `native_functions`, `run_native_benchmark`,
  `load_expression_file` and `BenchmarkResult`.

## Running the tests

```
pip install .[test]
pytest
```
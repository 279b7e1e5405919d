# flownodes

`flownodes` is a small framework for building dataflow graphs out of nodes.
Each node wraps a *data model*. The model states how many input and output
ports it has and which type of data each port carries. You add nodes to a
scene and connect an output port to an input port. Data then flows along the
connections.

The package draws nothing. It keeps the layout a graphical front end would
need as plain data you can read: node sizes, port positions, hit testing,
zoom and grid lines.

## Installation

```
pip install flownodes
```

To run the test suite, install the `test` extra:

```
pip install "flownodes[test]"
pytest
```

## Modules

- `flownodes.signals`: `Signal`. It calls its connected callables in order on
  `emit`. It also has `connect` and `disconnect`.
- `flownodes.ports`:
  - `PortType` (`IN`, `OUT`, `NONE`), `Port`, `opposite_port` and `INVALID`
    (port index `-1`).
  - `NodeDataType` (`id`, `name`). Types are compared by `id`.
  - `NodeData`, the abstract base for values that travel between nodes.
  - `TypeConverter`, a callable that turns one value into another.
- `flownodes.model`: `NodeDataModel`, the abstract base class for node logic.
  A subclass implements:
  - `caption`
  - `name`
  - `n_ports`
  - `data_type`
  - `set_in_data`
  - `out_data`

  Optional hooks cover port captions, `port_out_connection_policy`
  (`ConnectionPolicy.ONE` / `MANY`, default `MANY`), `validation_state`
  (`NodeValidationState`), `validation_message`, `resizable` and an
  `EmbeddedWidget` size description. A model announces new output by emitting
  `data_updated(port_index)`.
- `flownodes.registry`: `DataModelRegistry`. It keeps model creators by name
  and category. `create(name)` returns a new model, or `None`. It also keeps
  type converters keyed by `(input type id, output type id)`.
  - `register_model(creator, category="Nodes")` takes the name from
    `creator.static_name()` if the creator has one, and otherwise from
    `creator().name()`.
  - A name that is already registered is left unchanged.
- `flownodes.geometry`: `Point`, `Rect`, `FontMetrics` (fixed-pitch text
  measurement) and `NodeGeometry`. `NodeGeometry` gives a node's size, its
  port positions, port hit testing, its resize handle and where an embedded
  widget sits.
- `flownodes.node_state`: `NodeState`. It holds the connections attached to
  each port and how the node reacts to a connection being dragged over it.
- `flownodes.node`: `Node`. It combines a model, a state, a geometry and a
  `position`. Setting `position` moves the attached connection ends and emits
  `moved`.
- `flownodes.connection`: `Connection` and `ConnectionGeometry`.
  - `Connection(port_type, node, port_index)` starts a connection at one
    port. Its other end is left free.
  - `Connection.between(...)` builds a complete connection.
  - `save()` returns an empty dict for an incomplete connection.
- `flownodes.interaction`: `NodeConnectionInteraction`.
  - `can_connect()` returns `(port_index, converter)` or `None`.
  - `try_connect()` attaches the free end of a connection to the port under
    it. The port must be free and the types must match, or a converter must
    be registered for them.
  - `disconnect(port_type)` detaches one end again.
- `flownodes.scene`: `FlowScene`, which owns the nodes and connections. See
  "Scenes" below.
- `flownodes.view`: `FlowView`. It provides:
  - zoom: `scale_up`, `scale_down`, `scale_uniform(percent)`;
  - `delete_selected_nodes`;
  - `model_menu(filter_text)`, which groups model names by category and
    filters them without regard to case;
  - `create_node_at(name, position)`;
  - `grid_lines(top_left, bottom_right, step)`.

  The grid spacings are `FINE_GRID_STEP` (15) and `COARSE_GRID_STEP` (150).
- `flownodes.styles`: `Color`, `NodeStyle`, `FlowViewStyle` and the
  process-wide `StyleCollection`. The styles are read from JSON.
- `flownodes.properties`: `Properties`, a named-value store.
  `get(name, kind)` returns the value converted to `kind`, or `None`.
- `flownodes.calculator`: a worked example. It has `DecimalData`,
  `IntegerData`, the base class `MathOperationDataModel`, and the models
  `AdditionModel`, `SubtractionModel`, `MultiplicationModel` and
  `DivisionModel`.
  - When an input is missing, a model reports a `WARNING`.
  - `DivisionModel` reports an `ERROR` when the divisor is zero.

## Example

```python
from flownodes.registry import DataModelRegistry
from flownodes.scene import FlowScene
from flownodes.calculator import AdditionModel, DecimalData

registry = DataModelRegistry()
registry.register_model(AdditionModel, "Operators")

scene = FlowScene(registry)
add = scene.create_node(registry.create("Addition"))

model = add.model
model.set_in_data(DecimalData(2.0), 0)
model.set_in_data(DecimalData(3.5), 1)
print(model.out_data(0).number_as_text())   # 5.500000

text = scene.save_to_memory()               # JSON document as bytes
scene.clear_scene()
scene.load_from_memory(text)
```

## Scenes

Connecting nodes:

- `scene.connect_nodes(node_in, in_index, node_out, out_index, converter=None)`
  connects two nodes and sends the output's current data along the new
  connection right away.
- From then on, data is sent again whenever the output model emits
  `data_updated`.
- If a converter is given, each value passes through it before it reaches
  the input.

Other operations:

- `create_connection(port_type, node, port_index)` starts a partial
  connection. `connection_created` is emitted only once its free end is
  attached.
- `delete_connection` and `remove_node` detach connections and notify the
  models through `input_connection_deleted` and `output_connection_deleted`.
- `iter_node_data_dependent_order()` yields each model after the models that
  feed its inputs. It raises `ValueError` if the connections form a cycle.
- `locate_node_at(point, scene)` returns the most recently added node whose
  bounds contain `point`.

Saving and loading:

- `save_to_memory()` returns the scene as a JSON document.
- `load_from_memory(data)` adds the nodes and connections of a saved
  document. Models are recreated by name through the registry. A name that
  is not registered raises `LookupError`.
- `save(path)` writes the document to a file. It appends `.flow` unless the
  file name already ends in "flow".
- `load(path)` clears the scene first and returns whether a file was read.

## Styles

```python
from flownodes.styles import set_node_style

set_node_style('{"NodeStyle": {"NormalBoundaryColor": [255, 255, 255], "PenWidth": 1.5}}')
```

`set_node_style` and `set_flow_view_style` read every field of the style
from the `NodeStyle` or `FlowViewStyle` section of the document. A field
missing from the document becomes an invalid `Color`, or `0.0` for a number.
`Color.parse` accepts all of these forms:

- an `[r, g, b]` list;
- `#rgb`, `#rrggbb` or `#aarrggbb`;
- a small set of colour names.

## What the package does not do

There is no graphical editor:

- nothing is rendered, and there is no window, menu or mouse handling;
- the view and geometry classes only compute positions and sizes.

There is also no command-line program. Files are saved and loaded only
through `FlowScene.save` and `FlowScene.load`, which take explicit paths.
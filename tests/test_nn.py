import pytest

from scalargrad import MLP, InitConfig, Layer, Neuron, Tape, Value, run_backward


def test_neuron_parameters():
    n = Neuron(3, config=InitConfig(seed=0))
    params = n.parameters()
    assert len(params) == 4
    assert params[-1] is n.b
    assert n.b.data == 0.0
    assert all(-1.0 <= w.data < 1.0 for w in n.w)


def test_linear_neuron_forward_matches_weighted_sum():
    n = Neuron(3, nonlin=False, config=InitConfig(seed=0))
    x = [1.0, -2.0, 0.5]
    out = n(x)
    expected = sum(w.data * xi for w, xi in zip(n.w, x)) + n.b.data
    assert out.data == pytest.approx(expected)


def test_relu_neuron_output_is_non_negative():
    n = Neuron(4, config=InitConfig(seed=3))
    for x in ([1.0, 2.0, 3.0, 4.0], [-1.0, -2.0, -3.0, -4.0]):
        assert n(x).data >= 0.0


def test_neuron_accepts_value_inputs():
    n = Neuron(2, nonlin=False, config=InitConfig(seed=1))
    x = [Value(1.0), Value(-1.0)]
    out = n(x)
    run_backward(out)
    assert x[0].grad == pytest.approx(n.w[0].data)
    assert x[1].grad == pytest.approx(n.w[1].data)
    assert n.w[0].grad == pytest.approx(1.0)
    assert n.b.grad == 1.0


def test_neuron_rejects_wrong_input_length():
    n = Neuron(3)
    with pytest.raises(ValueError):
        n([1.0, 2.0])


def test_layer_returns_list():
    layer = Layer(2, 3, config=InitConfig(seed=0))
    out = layer([1.0, 2.0])
    assert isinstance(out, list)
    assert len(out) == 3
    assert len(Layer(2, 1)([1.0, 2.0])) == 1
    assert len(layer.parameters()) == 3 * (2 + 1)


def test_mlp_structure():
    mlp = MLP(3, [4, 4, 1], config=InitConfig(seed=0))
    assert len(mlp.parameters()) == (3 * 4 + 4) + (4 * 4 + 4) + (4 * 1 + 1)
    assert [n.nonlin for layer in mlp.layers for n in layer.neurons][-1] is False
    assert all(n.nonlin for layer in mlp.layers[:-1] for n in layer.neurons)
    assert repr(mlp).startswith("MLP of [Layer of [ReLUNeuron(3)")
    assert repr(mlp).endswith("Layer of [LinearNeuron(4)]]")


def test_mlp_seed_is_reproducible():
    first = MLP(2, [3, 1], config=InitConfig(seed=42))
    second = MLP(2, [3, 1], config=InitConfig(seed=42))
    assert [p.data for p in first.parameters()] == [p.data for p in second.parameters()]
    third = MLP(2, [3, 1], config=InitConfig(seed=7))
    assert [p.data for p in first.parameters()] != [p.data for p in third.parameters()]


def test_mlp_backward_populates_parameter_grads():
    mlp = MLP(3, [4, 1], config=InitConfig(seed=0))
    (out,) = mlp([2.0, 3.0, -1.0])
    out.backward()
    output_neuron = mlp.layers[-1].neurons[0]
    assert output_neuron.b.grad == 1.0
    for w, h in zip(output_neuron.w, mlp.layers[0]([2.0, 3.0, -1.0])):
        assert w.grad == pytest.approx(h.data)

    mlp.zero_grad()
    assert all(p.grad == 0.0 for p in mlp.parameters())


def test_init_config_range():
    mlp = MLP(2, [5], config=InitConfig(low=0.0, high=0.5, seed=1))
    weights = [w for n in mlp.layers[0].neurons for w in n.w]
    assert all(0.0 <= w.data < 0.5 for w in weights)


def test_init_config_rejects_empty_range():
    with pytest.raises(ValueError):
        InitConfig(low=1.0, high=1.0)


@pytest.mark.parametrize("nin, nouts", [(0, [1]), (2, []), (2, [0])])
def test_mlp_rejects_bad_sizes(nin, nouts):
    with pytest.raises(ValueError):
        MLP(nin, nouts)


def test_parameters_on_explicit_tape():
    t = Tape()
    mlp = MLP(2, [2, 1], tape=t)
    assert all(p.tape is t for p in mlp.parameters())
    (out,) = mlp([1.0, 1.0])
    assert out.tape is t

"""Tests for the YAML wire codec."""

import pytest

from apischeme.core.codec import YAMLCodec, struct_from_wire, struct_to_wire
from apischeme.core.config import CodecOptions
from apischeme.core.errors import DecodeError, EncodeError, UnknownKindError
from apischeme.core.schema.intstr import IntOrString
from apischeme.core.schema.meta import ObjectMeta
from apischeme.core.schema.quantity import Quantity
from apischeme.extensions import types as internal
from apischeme.extensions.v1beta1 import types as v1beta1
from apischeme.pod.types import Container, PodSpec, PodTemplateSpec, ResourceRequirements
from apischeme.runtime import new_scheme

SAMPLE_DEPLOYMENT = """apiVersion: extensions/v1beta1
kind: Deployment
metadata:
  name: payments-api
  labels:
    app: payments-api
spec:
  replicas: 3
  selector:
    matchLabels:
      app: payments-api
  template:
    metadata:
      labels:
        app: payments-api
    spec:
      containers:
      - name: payments-api
        image: payments-api:1.2.3
        resources:
          limits:
            cpu: 500m
  strategy:
    type: RollingUpdate
    rollingUpdate:
      maxSurge: 25%
      maxUnavailable: 0
"""


@pytest.fixture(scope="module")
def codec():
    return YAMLCodec(new_scheme(), options=CodecOptions())


def _deployment() -> v1beta1.Deployment:
    return v1beta1.Deployment(
        metadata=ObjectMeta(name="web", labels={"app": "web", "tier": "frontend"}),
        spec=v1beta1.DeploymentSpec(
            replicas=0,
            template=PodTemplateSpec(
                metadata=ObjectMeta(labels={"app": "web"}),
                spec=PodSpec(containers=[
                    Container(
                        name="web",
                        image="nginx:1.9",
                        resources=ResourceRequirements(limits={"cpu": Quantity("100m")}),
                    ),
                ]),
            ),
            strategy=v1beta1.DeploymentStrategy(
                type="RollingUpdate",
                rolling_update=v1beta1.RollingUpdateDeployment(),
            ),
        ),
    )


class TestDecode:
    """Tests for decoding documents."""

    def test_decode_sample(self, codec):
        """Test decoding a hand-written manifest."""
        obj = codec.decode(SAMPLE_DEPLOYMENT.encode("utf-8"))

        assert isinstance(obj, v1beta1.Deployment)
        assert obj.metadata.name == "payments-api"
        assert obj.spec.replicas == 3
        assert obj.spec.selector.match_labels == {"app": "payments-api"}
        assert obj.spec.strategy.rolling_update.max_surge == IntOrString.from_string("25%")
        assert obj.spec.strategy.rolling_update.max_unavailable == IntOrString.from_int(0)
        container = obj.spec.template.spec.containers[0]
        assert container.resources.limits == {"cpu": Quantity("500m")}
        assert container.resources.requests is None

    def test_decode_accepts_text(self, codec):
        """Test that str documents decode like bytes."""
        assert codec.decode(SAMPLE_DEPLOYMENT) == codec.decode(SAMPLE_DEPLOYMENT.encode())

    def test_decode_does_not_default(self, codec):
        """Test that omitted fields stay unset after decoding."""
        obj = codec.decode(b"apiVersion: extensions/v1beta1\nkind: Deployment\n")

        assert obj.spec.replicas is None
        assert obj.spec.strategy.type is None
        assert obj.spec.unique_label_key is None
        assert obj.metadata.labels is None

    def test_decode_ignores_unknown_fields(self, codec):
        """Test that unknown fields are dropped."""
        obj = codec.decode(
            b"apiVersion: extensions/v1beta1\nkind: ReplicaSet\nspec:\n  replicas: 2\n  paused: true\n"
        )

        assert obj.spec.replicas == 2

    def test_decode_null_field_means_unset(self, codec):
        """Test that an explicit null leaves the field at its default."""
        obj = codec.decode(b"apiVersion: extensions/v1beta1\nkind: Job\nspec:\n  completions: null\n")

        assert obj.spec.completions is None

    def test_decode_unknown_kind(self, codec):
        """Test that an unregistered kind raises UnknownKindError."""
        with pytest.raises(UnknownKindError):
            codec.decode(b"apiVersion: extensions/v1beta1\nkind: Widget\n")

    def test_decode_unknown_group(self, codec):
        """Test that a registered kind name in another group is unknown."""
        with pytest.raises(UnknownKindError):
            codec.decode(b"apiVersion: apps/v1\nkind: Deployment\n")

    @pytest.mark.parametrize(
        "data",
        [
            b"\xff\xfe\x00",
            b"spec: [1, 2\n",
            b"- a\n- b\n",
            b"",
            b"kind: Deployment\n",
            b"apiVersion: extensions/v1beta1\n",
            b"apiVersion: 1\nkind: Deployment\n",
            b"apiVersion: a/b/c\nkind: Deployment\n",
        ],
    )
    def test_decode_malformed(self, codec, data):
        """Test that malformed documents raise DecodeError."""
        with pytest.raises(DecodeError):
            codec.decode(data)

    def test_decode_wrong_scalar_type_reports_path(self, codec):
        """Test that type mismatches name the offending field."""
        with pytest.raises(DecodeError) as exc_info:
            codec.decode(b"apiVersion: extensions/v1beta1\nkind: Deployment\nspec:\n  replicas: three\n")

        assert exc_info.value.path == "spec.replicas"
        assert "spec.replicas" in str(exc_info.value)

    def test_decode_boolean_is_not_integer(self, codec):
        """Test that booleans are rejected for integer fields."""
        with pytest.raises(DecodeError):
            codec.decode(b"apiVersion: extensions/v1beta1\nkind: ReplicaSet\nspec:\n  replicas: true\n")

    def test_decode_wrong_container_type(self, codec):
        """Test that a sequence where a mapping is expected fails."""
        with pytest.raises(DecodeError) as exc_info:
            codec.decode(b"apiVersion: extensions/v1beta1\nkind: Job\nmetadata:\n  labels: [a, b]\n")

        assert exc_info.value.path == "metadata.labels"

    def test_decode_rejects_non_bytes(self, codec):
        """Test that only bytes and str are accepted."""
        with pytest.raises(DecodeError):
            codec.decode(42)  # type: ignore


class TestEncode:
    """Tests for encoding objects."""

    def test_encode_embeds_kind(self, codec):
        """Test that the document starts with apiVersion and kind."""
        text = codec.encode(v1beta1.Job()).decode("utf-8")

        assert text.startswith("apiVersion: extensions/v1beta1\nkind: Job\n")

    def test_encode_decode_preserves_object(self, codec):
        """Test that decoding an encoded object gives an equal object."""
        original = _deployment()

        assert codec.decode(codec.encode(original)) == original

    def test_encode_is_deterministic(self, codec):
        """Test that re-encoding a decoded object reproduces the bytes."""
        data = codec.encode(_deployment())

        assert codec.encode(codec.decode(data)) == data

    def test_encode_omits_unset_fields(self, codec):
        """Test that None fields are not written."""
        text = codec.encode(v1beta1.ReplicaSet()).decode("utf-8")

        assert "replicas" not in text
        assert "selector" not in text
        assert "template" not in text

    def test_encode_keeps_zero_and_empty_struct(self, codec):
        """Test that explicit zeros and empty structs are written."""
        text = codec.encode(_deployment()).decode("utf-8")

        assert "replicas: 0" in text
        assert "rollingUpdate: {}" in text

    def test_encode_sorts_map_keys(self, codec):
        """Test that label maps are written in key order."""
        obj = v1beta1.Job(metadata=ObjectMeta(labels={"zone": "b", "app": "a"}))
        text = codec.encode(obj).decode("utf-8")

        assert text.index("app: a") < text.index("zone: b")

    def test_encode_internal_object(self, codec):
        """Test that internal objects are written in their registered version."""
        obj = internal.ReplicaSet(spec=internal.ReplicaSetSpec(replicas=4))
        decoded = codec.decode(codec.encode(obj))

        assert isinstance(decoded, v1beta1.ReplicaSet)
        assert decoded.spec.replicas == 4

    def test_encode_unregistered_type(self, codec):
        """Test that unregistered types raise EncodeError."""
        with pytest.raises(EncodeError) as exc_info:
            codec.encode(PodTemplateSpec())

        assert isinstance(exc_info.value.__cause__, UnknownKindError)

    def test_string_label_values_stay_strings(self, codec):
        """Test that label values that look like numbers survive."""
        obj = v1beta1.Job(metadata=ObjectMeta(labels={"version": "1", "enabled": "true"}))

        assert codec.decode(codec.encode(obj)).metadata.labels == {"version": "1", "enabled": "true"}

    def test_indent_option(self):
        """Test that layout options change the output."""
        codec = YAMLCodec(new_scheme(), options=CodecOptions(indent=4, sequence_indent=4))
        text = codec.encode(v1beta1.ReplicaSet(spec=v1beta1.ReplicaSetSpec(replicas=1))).decode()

        assert "\n    replicas: 1\n" in text


class TestStructHelpers:
    """Tests for the dataclass <-> mapping helpers."""

    def test_struct_to_wire_uses_camel_case(self):
        """Test wire field names."""
        wire = struct_to_wire(v1beta1.LabelSelector(match_labels={"a": "b"}))

        assert dict(wire) == {"matchLabels": {"a": "b"}}

    def test_struct_from_wire_nested_lists(self):
        """Test decoding lists of structs."""
        selector = struct_from_wire(v1beta1.LabelSelector, {
            "matchExpressions": [{"key": "tier", "operator": "In", "values": ["web", "api"]}],
        })

        assert selector.match_expressions == [
            v1beta1.LabelSelectorRequirement(key="tier", operator="In", values=["web", "api"]),
        ]

    def test_struct_from_wire_requires_mapping(self):
        """Test that a non-mapping raises DecodeError."""
        with pytest.raises(DecodeError):
            struct_from_wire(v1beta1.LabelSelector, ["a"])

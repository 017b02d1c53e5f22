"""End-to-end tests through the process-wide scheme.

Each test follows the storage path: encode the object as a user would send
it, decode it, apply defaults, convert to internal and back.
"""

import copy

import pytest

from apischeme import runtime
from apischeme.core.errors import UnknownKindError
from apischeme.core.schema.intstr import IntOrString
from apischeme.core.schema.meta import ObjectMeta
from apischeme.core.schema.quantity import Quantity
from apischeme.extensions.constants import DEFAULT_DEPLOYMENT_UNIQUE_LABEL_KEY
from apischeme.extensions.v1beta1 import types as v1beta1
from apischeme.pod.types import Container, PodSpec, PodTemplateSpec, ResourceRequirements

ONE = IntOrString.from_int(1)


def _labelled_template(labels) -> PodTemplateSpec:
    return PodTemplateSpec(
        metadata=ObjectMeta(labels=labels),
        spec=PodSpec(containers=[Container(name="main", image="busybox:1.36")]),
    )


class TestScenarios:
    """Defaulting scenarios observed after a full round trip."""

    def test_job(self):
        job = v1beta1.Job(spec=v1beta1.JobSpec(template=_labelled_template({"job": "selector"})))

        result = runtime.round_trip(job)

        assert result.spec.selector.match_labels == {"job": "selector"}
        assert result.spec.completions == 1
        assert result.spec.parallelism == 1

    def test_empty_deployment(self):
        result = runtime.round_trip(v1beta1.Deployment())

        assert result.spec.replicas == 1
        assert result.spec.strategy.type == "RollingUpdate"
        assert result.spec.strategy.rolling_update.max_surge == ONE
        assert result.spec.strategy.rolling_update.max_unavailable == ONE
        assert result.spec.unique_label_key == DEFAULT_DEPLOYMENT_UNIQUE_LABEL_KEY

    def test_recreate_deployment(self):
        deployment = v1beta1.Deployment(spec=v1beta1.DeploymentSpec(
            strategy=v1beta1.DeploymentStrategy(type="Recreate"),
        ))

        result = runtime.round_trip(deployment)

        assert result.spec.strategy.type == "Recreate"
        assert result.spec.strategy.rolling_update is None

    def test_resources_not_propagated(self):
        """Test that a CPU limit never turns into a CPU request."""
        template = PodTemplateSpec(spec=PodSpec(containers=[Container(
            name="main",
            image="busybox",
            resources=ResourceRequirements(limits={"cpu": Quantity("100m")}),
        )]))
        rs = v1beta1.ReplicaSet(spec=v1beta1.ReplicaSetSpec(template=template))

        result = runtime.round_trip(rs)
        resources = result.spec.template.spec.containers[0].resources

        assert resources.requests is None
        assert resources.request("cpu").is_zero()
        assert resources.limit("cpu") == Quantity("100m")

    def test_explicit_zero_replicas_survive(self):
        rs = v1beta1.ReplicaSet(spec=v1beta1.ReplicaSetSpec(replicas=0))

        assert runtime.round_trip(rs).spec.replicas == 0

    def test_empty_rolling_update_survives_wire(self):
        """Test that an empty rollingUpdate is kept on the wire and then defaulted."""
        deployment = v1beta1.Deployment(spec=v1beta1.DeploymentSpec(
            strategy=v1beta1.DeploymentStrategy(rolling_update=v1beta1.RollingUpdateDeployment()),
        ))

        decoded = runtime.decode(runtime.encode(deployment))

        assert decoded.spec.strategy.rolling_update == v1beta1.RollingUpdateDeployment()
        assert runtime.apply_defaults(decoded).spec.strategy.rolling_update.max_surge == ONE

    def test_unknown_kind(self):
        data = b"apiVersion: extensions/v1beta1\nkind: Ingress\nspec: {}\n"

        with pytest.raises(UnknownKindError):
            runtime.decode(data)


OBJECTS = [
    v1beta1.DaemonSet(spec=v1beta1.DaemonSetSpec(template=_labelled_template({"app": "agent"}))),
    v1beta1.Deployment(
        metadata=ObjectMeta(name="web", namespace="prod"),
        spec=v1beta1.DeploymentSpec(
            replicas=3,
            template=_labelled_template({"app": "web"}),
            strategy=v1beta1.DeploymentStrategy(rolling_update=v1beta1.RollingUpdateDeployment(
                max_surge=IntOrString.from_string("25%"),
            )),
            min_ready_seconds=5,
        ),
    ),
    v1beta1.Job(spec=v1beta1.JobSpec(parallelism=3, template=_labelled_template({"job": "batch"}))),
    v1beta1.ReplicaSet(
        metadata=ObjectMeta(labels={"bar": "foo"}),
        spec=v1beta1.ReplicaSetSpec(template=_labelled_template({"foo": "bar"})),
    ),
    v1beta1.HorizontalPodAutoscaler(spec=v1beta1.HorizontalPodAutoscalerSpec(
        scale_ref=v1beta1.SubresourceReference(kind="Deployment", name="web", subresource="scale"),
        max_replicas=10,
    )),
    v1beta1.Deployment(spec=v1beta1.DeploymentSpec(strategy=v1beta1.DeploymentStrategy(
        type="Recreate",
        rolling_update=v1beta1.RollingUpdateDeployment(),
    ))),
    v1beta1.DaemonSet(spec=v1beta1.DaemonSetSpec(update_strategy=v1beta1.DaemonSetUpdateStrategy(
        type="OnDelete",
        rolling_update=v1beta1.RollingUpdateDaemonSet(),
    ))),
]


@pytest.mark.parametrize("obj", OBJECTS, ids=lambda obj: type(obj).__name__)
class TestRoundTripFidelity:
    """Properties that hold for every registered kind."""

    def test_internal_round_trip_equals_defaulted(self, obj):
        defaulted = runtime.apply_defaults(obj)

        assert runtime.to_external(runtime.to_internal(defaulted)) == defaulted

    def test_wire_round_trip_equals_defaulted(self, obj):
        defaulted = runtime.apply_defaults(runtime.decode(runtime.encode(obj)))

        assert runtime.round_trip(obj) == defaulted

    def test_reencoding_is_byte_identical(self, obj):
        """Test that the defaulted object and its stored form encode identically."""
        defaulted = runtime.apply_defaults(obj)
        stored = runtime.to_internal(defaulted)

        assert runtime.encode(stored) == runtime.encode(defaulted)
        assert runtime.encode(runtime.decode(runtime.encode(defaulted))) == runtime.encode(defaulted)

    def test_input_untouched(self, obj):
        before = copy.deepcopy(obj)

        runtime.round_trip(obj)

        assert obj == before

    def test_defaulting_idempotent(self, obj):
        once = runtime.apply_defaults(obj)

        assert runtime.apply_defaults(once) == once

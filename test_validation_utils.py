#!/usr/bin/env python3
"""
Test script for the pure validation utilities: versions, disk sizes, subnet
topology, ARNs and the validators library.
"""

import sys
import os
import datetime
import tempfile

# Add the parent directory to Python path to import our modules
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

try:
    from cryptography import x509
    from cryptography.hazmat.primitives import hashes, serialization
    from cryptography.hazmat.primitives.asymmetric import ec
    from cryptography.x509.oid import NameOID

    from models.cluster import VersionRecord
    from models.errors import (
        AvailabilityZoneCountError, DiskSizeUnitTooSmallError, ErrorKind, InvalidARNError,
        InvalidDiskSizeFormatError, InvalidPolicyVersionError, InvalidUpgradeTargetError,
        InvalidVersionError, MissingUnitSuffixError, NoVersionsAvailableError,
        SubnetCountMismatchError, SubnetIsolationError, ValidationError
    )
    from models.iam import LinkedRoleLabel
    from models.network import Subnet
    from utils.version_utils import (
        VersionParser, VersionComparator, OpenShiftVersionUtils, get_version_minor
    )
    from utils.disk_size_utils import MAX_INT64, parse_disk_size_to_gibibyte
    from utils.subnet_utils import (
        required_subnet_count, validate_subnets_count, validate_availability_zones_count,
        classify_subnets, validate_isolation
    )
    from utils.arn_utils import parse_arn, get_path_from_arn, is_valid_arn
    from utils import validators
except ImportError as e:
    print(f"❌ Import error: {e}")
    print("Make sure the packages are in the correct directories:")
    print("  models/errors.py, models/network.py, models/iam.py, models/cluster.py")
    print("  utils/version_utils.py, utils/disk_size_utils.py, utils/subnet_utils.py")
    print("  utils/arn_utils.py, utils/validators.py")
    sys.exit(1)


class TestResults:
    """Track test results."""
    __test__ = False

    def __init__(self):
        self.passed = 0
        self.failed = 0
        self.errors = []

    def test_pass(self, test_name: str):
        print(f"✅ {test_name}")
        self.passed += 1

    def test_fail(self, test_name: str, error: str):
        print(f"❌ {test_name}: {error}")
        self.failed += 1
        self.errors.append(f"{test_name}: {error}")

    def expect_raises(self, test_name: str, exc_type, func, *args, **kwargs):
        """Record a pass if func raises exc_type; return the exception."""
        try:
            value = func(*args, **kwargs)
        except exc_type as e:
            self.test_pass(test_name)
            return e
        except Exception as e:
            self.test_fail(test_name, f"Expected {exc_type.__name__}, got {type(e).__name__}: {e}")
            return None
        self.test_fail(test_name, f"Expected {exc_type.__name__}, got result {value!r}")
        return None

    def assert_passed(self):
        assert self.failed == 0, "; ".join(self.errors)


def make_certificate_pem() -> bytes:
    """Create a throwaway self-signed certificate."""
    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "rosa-tools-test")])
    now = datetime.datetime.now(datetime.timezone.utc)
    certificate = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + datetime.timedelta(days=1))
        .sign(key, hashes.SHA256())
    )
    return certificate.public_bytes(serialization.Encoding.PEM)


def test_version_parser():
    """Test OpenShift version parsing."""
    results = TestResults()

    try:
        version = VersionParser.parse_version("openshift-v4.12.3")
        if (version.major, version.minor, version.patch) == (4, 12, 3):
            results.test_pass("Prefixed version parsing")
        else:
            results.test_fail("Prefixed version parsing", f"Got {version}")

        version = VersionParser.parse_version("4.12.0-candidate", "candidate")
        if version.base_version == "4.12.0" and not version.is_prerelease:
            results.test_pass("Channel group suffix removed")
        else:
            results.test_fail("Channel group suffix removed", f"Got {version.base_version}")

        version = VersionParser.parse_version("4.13.0-rc.1")
        if version.prerelease == "rc.1" and version < VersionParser.parse_version("4.13.0"):
            results.test_pass("Pre-release sorts below release")
        else:
            results.test_fail("Pre-release sorts below release", f"Got {version}")

        if VersionParser.parse_version("4.12").base_version == "4.12.0":
            results.test_pass("Short version padded")
        else:
            results.test_fail("Short version padded", VersionParser.parse_version("4.12").base_version)

        results.expect_raises("Malformed version rejected", InvalidVersionError,
                              VersionParser.parse_version, "four.twelve")
        error = results.expect_raises("Empty version rejected", InvalidVersionError,
                                      VersionParser.parse_version, "")
        if error is not None and error.kind == ErrorKind.INVALID_FORMAT:
            results.test_pass("Invalid version kind")
        else:
            results.test_fail("Invalid version kind", str(error))

        if VersionParser.parse_minor("4.14.2") == "4.14":
            results.test_pass("Strict minor parsing")
        else:
            results.test_fail("Strict minor parsing", VersionParser.parse_minor("4.14.2"))

        minors = [get_version_minor("openshift-v4.12.3"), get_version_minor("4.12.3")]
        if minors == ["4.12", "4.12"]:
            results.test_pass("Version minor is deterministic")
        else:
            results.test_fail("Version minor is deterministic", str(minors))

        if get_version_minor("openshift-vfoo.bar.baz") == "foo.bar":
            results.test_pass("Display fallback for unparsable version")
        else:
            results.test_fail("Display fallback for unparsable version", get_version_minor("openshift-vfoo.bar.baz"))

    except Exception as e:
        results.test_fail("Version parser tests", str(e))

    results.assert_passed()


def test_version_comparison():
    """Test version ordering and comparison helpers."""
    results = TestResults()

    try:
        if VersionComparator.greater_or_equal("4.12.3", "4.12.3"):
            results.test_pass("greater_or_equal is reflexive")
        else:
            results.test_fail("greater_or_equal is reflexive", "4.12.3 >= 4.12.3 was False")

        a, b = "4.12", "4.12.0"
        if VersionComparator.greater_or_equal(a, b) and VersionComparator.greater_or_equal(b, a):
            if VersionParser.parse_version(a) == VersionParser.parse_version(b):
                results.test_pass("Antisymmetry implies equality")
            else:
                results.test_fail("Antisymmetry implies equality", f"{a} != {b}")
        else:
            results.test_fail("Antisymmetry implies equality", "Expected both directions to hold")

        if VersionComparator.compare_versions("4.10.0", "4.9.12") == 1:
            results.test_pass("Numeric, not lexical, comparison")
        else:
            results.test_fail("Numeric, not lexical, comparison", "4.10.0 should be > 4.9.12")

        sorted_versions = VersionComparator.sort_versions(["4.10", "4.9", "4.11"])
        if sorted_versions == ["4.9", "4.10", "4.11"]:
            results.test_pass("Version sorting")
        else:
            results.test_fail("Version sorting", str(sorted_versions))

        if VersionComparator.supports_feature_floor("4.14.1", "4.13"):
            results.test_pass("Feature floor met")
        else:
            results.test_fail("Feature floor met", "4.14.1 should support 4.13")

        if not VersionComparator.supports_feature_floor("4.12.9", "4.13"):
            results.test_pass("Feature floor not met")
        else:
            results.test_fail("Feature floor not met", "4.12.9 should not support 4.13")

        results.expect_raises("Feature floor rejects malformed input", InvalidVersionError,
                              VersionComparator.supports_feature_floor, "latest", "4.13")

    except Exception as e:
        results.test_fail("Version comparison tests", str(e))

    results.assert_passed()


def test_openshift_version_utils():
    """Test STS support, channel filtering and upgrade target validation."""
    results = TestResults()

    try:
        checks = [
            (("4.7.10", "stable"), False),
            (("4.7.11", "stable"), True),
            (("4.6.0-nightly", "nightly"), True),
            (("4.8.0-candidate", "candidate"), True),
        ]
        for (raw_id, channel), expected in checks:
            if OpenShiftVersionUtils.has_sts_support(raw_id, channel) == expected:
                results.test_pass(f"STS support {raw_id} ({channel})")
            else:
                results.test_fail(f"STS support {raw_id} ({channel})", f"Expected {expected}")

        records = [
            VersionRecord(id="openshift-v4.12.3", raw_id="4.12.3"),
            VersionRecord(id="openshift-v4.7.0", raw_id="4.7.0"),
            VersionRecord(id="openshift-v4.13.0-candidate", raw_id="4.13.0", channel_group="candidate"),
            VersionRecord(id="openshift-v4.12.8", raw_id="4.12.8"),
            VersionRecord(id="openshift-v4.13.1", raw_id="4.13.1"),
        ]
        versions = OpenShiftVersionUtils.filter_by_channel(records, "stable", require_sts_support=True)
        if [v.base_version for v in versions] == ["4.12.3", "4.12.8", "4.13.1"]:
            results.test_pass("Channel filtering keeps order and drops pre-STS versions")
        else:
            results.test_fail("Channel filtering", str([v.base_version for v in versions]))

        versions = OpenShiftVersionUtils.filter_by_channel(records, "stable", require_sts_support=False)
        if len(versions) == 4:
            results.test_pass("Channel filtering without STS requirement")
        else:
            results.test_fail("Channel filtering without STS requirement", f"Got {len(versions)}")

        minors = OpenShiftVersionUtils.get_versions_list(records, "stable")
        if minors == ["4.12", "4.13"]:
            results.test_pass("Distinct minor versions")
        else:
            results.test_fail("Distinct minor versions", str(minors))

        versions = OpenShiftVersionUtils.filter_by_channel(records, "", require_sts_support=True)
        if [(v.base_version, v.channel_group) for v in versions] == [
                ("4.12.3", "stable"), ("4.13.0", "candidate"), ("4.12.8", "stable"), ("4.13.1", "stable")]:
            results.test_pass("Empty channel group keeps every group")
        else:
            results.test_fail("Empty channel group keeps every group", str([v.base_version for v in versions]))

        minors = OpenShiftVersionUtils.get_versions_list(records, "")
        if minors == ["4.12", "4.13"]:
            results.test_pass("Distinct minor versions across channel groups")
        else:
            results.test_fail("Distinct minor versions across channel groups", str(minors))

        error = results.expect_raises("Unknown channel group", NoVersionsAvailableError,
                                      OpenShiftVersionUtils.filter_by_channel, records, "fast", True)
        if error is not None and "could not find versions for the provided channel-group: 'fast'" in str(error).lower():
            results.test_pass("Unknown channel group message")
        else:
            results.test_fail("Unknown channel group message", str(error))

        OpenShiftVersionUtils.validate_upgrade_target(["4.12.5", "4.12.10"], "4.12.10", "4.12.3")
        results.test_pass("Available upgrade target accepted")

        error = results.expect_raises("Unavailable upgrade target rejected", InvalidUpgradeTargetError,
                                      OpenShiftVersionUtils.validate_upgrade_target,
                                      ["4.12.10", "4.12.5"], "4.12.7", "4.12.3")
        if error is not None and error.valid_versions == ["4.12.5", "4.12.10"]:
            results.test_pass("Upgrade error lists sorted valid versions")
        else:
            results.test_fail("Upgrade error lists sorted valid versions", str(error))

        if error is not None and "Valid versions: 4.12.5, 4.12.10" in str(error) and error.kind == ErrorKind.INCOMPATIBLE:
            results.test_pass("Upgrade error message")
        else:
            results.test_fail("Upgrade error message", str(error))

        if OpenShiftVersionUtils.is_valid_version("4.12", "4.12.0"):
            results.test_pass("Canonical version match")
        else:
            results.test_fail("Canonical version match", "4.12 should match 4.12.0")

        if not OpenShiftVersionUtils.is_valid_version("4.12", "4.12.0", "4.12.0"):
            results.test_pass("Upgrade target must be newer than the cluster")
        else:
            results.test_fail("Upgrade target must be newer than the cluster", "4.12 accepted for 4.12.0")

        for requested in ("4.12.3", "4.12.3.0"):
            results.expect_raises(f"Older upgrade target {requested} rejected", InvalidUpgradeTargetError,
                                  OpenShiftVersionUtils.validate_upgrade_target, ["4.12.3"], requested, "4.12.5")

        OpenShiftVersionUtils.validate_upgrade_target(["4.12.3"], "4.12.3.0", "4.12.1")
        results.test_pass("Canonical upgrade target accepted")

        if not OpenShiftVersionUtils.is_valid_version("4.12.3", "4.12.3", "4.12.5"):
            results.test_pass("Exact match older than the cluster")
        else:
            results.test_fail("Exact match older than the cluster", "4.12.3 accepted for 4.12.5")

        if OpenShiftVersionUtils.resolve_policy_version("", ["4.12", "4.13"]) == "4.13":
            results.test_pass("Empty policy version resolves to latest")
        else:
            results.test_fail("Empty policy version resolves to latest", "")

        results.expect_raises("Unknown policy version rejected", InvalidPolicyVersionError,
                              OpenShiftVersionUtils.resolve_policy_version, "4.14", ["4.12", "4.13"])

    except Exception as e:
        results.test_fail("OpenShift version utils tests", str(e))

    results.assert_passed()


def test_disk_size_parser():
    """Test disk size parsing to gibibytes."""
    results = TestResults()

    try:
        accepted = [
            ("", 0),
            ("0", 0),
            ("0G", 0),
            ("300GiB", 300),
            ("300 gib", 300),
            ("300Gi", 300),
            ("128g", 119),
            ("128 GB", 119),
            ("1 TB", 931),
            ("1tb", 931),
            ("1Ti", 1024),
            ("1 TiB", 1024),
            ("2.5T", 2328),
        ]
        for size, expected in accepted:
            value = parse_disk_size_to_gibibyte(size)
            if value == expected:
                results.test_pass(f"Disk size '{size}' = {expected} GiB")
            else:
                results.test_fail(f"Disk size '{size}'", f"Expected {expected}, got {value}")

        for size in ["500K", "500k", "500Ki", "500M", "500Mi", "1024 Mi"]:
            results.expect_raises(f"Unit too small '{size}'", DiskSizeUnitTooSmallError,
                                  parse_disk_size_to_gibibyte, size)

        error = results.expect_raises("Missing unit suffix", MissingUnitSuffixError,
                                      parse_disk_size_to_gibibyte, "100")
        if error is not None and "accepted units are Giga or Tera" in str(error):
            results.test_pass("Missing unit message lists accepted units")
        else:
            results.test_fail("Missing unit message lists accepted units", str(error))

        if parse_disk_size_to_gibibyte(str(MAX_INT64)) == MAX_INT64 // 2 ** 30:
            results.test_pass("Max int64 sentinel passes through")
        else:
            results.test_fail("Max int64 sentinel passes through", "")

        for size in ["abc", "12XB", "-5G", "G"]:
            error = results.expect_raises(f"Invalid format '{size}'", InvalidDiskSizeFormatError,
                                          parse_disk_size_to_gibibyte, size)
            if error is not None and error.kind != ErrorKind.INVALID_FORMAT:
                results.test_fail(f"Invalid format kind '{size}'", str(error.kind))

    except Exception as e:
        results.test_fail("Disk size parser tests", str(e))

    results.assert_passed()


def test_subnet_topology():
    """Test required subnet counts and count validation."""
    results = TestResults()

    table = {
        (False, False, False): 2,
        (True, False, False): 6,
        (False, True, False): 1,
        (True, True, False): 3,
        (False, False, True): 2,
        (True, False, True): 2,
        (False, True, True): 1,
        (True, True, True): 1,
    }

    try:
        for (multi_az, private_link, hosted), expected in table.items():
            name = f"multi_az={multi_az} private_link={private_link} hosted={hosted}"
            count = required_subnet_count(multi_az, private_link, hosted)
            if count != expected:
                results.test_fail(f"Required count {name}", f"Expected {expected}, got {count}")
                continue

            validate_subnets_count(multi_az, private_link, hosted, expected)

            if hosted:
                validate_subnets_count(multi_az, private_link, hosted, expected + 3)
                error = results.expect_raises(f"Hosted minimum {name}", SubnetCountMismatchError,
                                              validate_subnets_count, multi_az, private_link, hosted, expected - 1)
                if error is not None and not error.minimum:
                    results.test_fail(f"Hosted minimum flag {name}", "minimum should be True")
            else:
                for wrong in (expected - 1, expected + 1):
                    error = results.expect_raises(f"Classic exact {name} got {wrong}", SubnetCountMismatchError,
                                                  validate_subnets_count, multi_az, private_link, hosted, wrong)
                    if error is not None and (error.expected, error.got) != (expected, wrong):
                        results.test_fail(f"Mismatch details {name}", f"{error.expected}/{error.got}")

        error = results.expect_raises("Multi-AZ message", SubnetCountMismatchError,
                                      validate_subnets_count, True, False, False, 2)
        if error is not None and str(error) == \
                "The number of subnets for a multi-AZ cluster should be 6, instead received: 2":
            results.test_pass("Multi-AZ mismatch message")
        else:
            results.test_fail("Multi-AZ mismatch message", str(error))

        error = results.expect_raises("Public hosted message", SubnetCountMismatchError,
                                      validate_subnets_count, False, False, True, 1)
        if error is not None and "should be at least two" in str(error) and error.kind == ErrorKind.OUT_OF_RANGE:
            results.test_pass("Public hosted mismatch message")
        else:
            results.test_fail("Public hosted mismatch message", str(error))

        validate_availability_zones_count(True, 3)
        validate_availability_zones_count(False, 1)
        results.test_pass("Availability zone counts accepted")
        results.expect_raises("Multi-AZ needs three zones", AvailabilityZoneCountError,
                              validate_availability_zones_count, True, 2)

    except Exception as e:
        results.test_fail("Subnet topology tests", str(e))

    results.assert_passed()


def test_subnet_classification():
    """Test subnet partitioning and hosted cluster isolation."""
    results = TestResults()

    try:
        vpc_subnets = [
            Subnet("subnet-a", "vpc-1", "us-east-1a"),
            Subnet("subnet-b", "vpc-1", "us-east-1b"),
            Subnet("subnet-c", "vpc-1", "us-east-1c"),
        ]
        classification = classify_subnets(vpc_subnets, ["subnet-a", "subnet-c", "subnet-x"], {"subnet-a", "subnet-b"})

        if [s.subnet_id for s in classification.private_subnets] == ["subnet-a"]:
            results.test_pass("Private partition")
        else:
            results.test_fail("Private partition", str(classification.to_dict()))

        if [s.subnet_id for s in classification.public_subnets] == ["subnet-c"]:
            results.test_pass("Public partition")
        else:
            results.test_fail("Public partition", str(classification.to_dict()))

        if classification.dropped_ids == ["subnet-x"]:
            results.test_pass("Unmatched ids recorded as dropped")
        else:
            results.test_fail("Unmatched ids recorded as dropped", str(classification.dropped_ids))

        if all(s.is_private is None for s in vpc_subnets):
            results.test_pass("Input subnets left unchanged")
        else:
            results.test_fail("Input subnets left unchanged", str([s.is_private for s in vpc_subnets]))

        flags = [s.is_private for s in classification.private_subnets + classification.public_subnets]
        if flags == [True, False]:
            results.test_pass("Classified subnets carry their visibility")
        else:
            results.test_fail("Classified subnets carry their visibility", str(flags))

        if classification.count_by_availability_zone() == {"us-east-1a": 1, "us-east-1c": 1}:
            results.test_pass("Count by availability zone")
        else:
            results.test_fail("Count by availability zone", str(classification.count_by_availability_zone()))

        validate_isolation(True, 2, 0)
        validate_isolation(False, 1, 1)
        results.test_pass("Valid isolation accepted")

        results.expect_raises("Private cluster with public subnet", SubnetIsolationError,
                              validate_isolation, True, 1, 1)
        results.expect_raises("Public cluster without public subnet", SubnetIsolationError,
                              validate_isolation, False, 2, 0)

    except Exception as e:
        results.test_fail("Subnet classification tests", str(e))

    results.assert_passed()


def test_arn_utils():
    """Test ARN parsing and linked role labels."""
    results = TestResults()

    try:
        arn = parse_arn("arn:aws:iam::123456789012:role/service-role/my-role")
        if (arn.account_id, arn.resource_name, arn.path, arn.resource_type) == \
                ("123456789012", "my-role", "/service-role/", "role"):
            results.test_pass("Role ARN with path")
        else:
            results.test_fail("Role ARN with path", str(arn))

        if get_path_from_arn("arn:aws:iam::123456789012:role/my-role") == "/":
            results.test_pass("Role ARN without path")
        else:
            results.test_fail("Role ARN without path", get_path_from_arn("arn:aws:iam::123456789012:role/my-role"))

        error = results.expect_raises("Invalid ARN rejected", InvalidARNError, parse_arn, "not-an-arn")
        if error is not None and error.details.get('arn') == "not-an-arn":
            results.test_pass("Invalid ARN carries offending value")
        else:
            results.test_fail("Invalid ARN carries offending value", str(error))

        if is_valid_arn("arn:aws-us-gov:iam::123456789012:role/x") and not is_valid_arn(""):
            results.test_pass("ARN validity predicate")
        else:
            results.test_fail("ARN validity predicate", "")

        label = LinkedRoleLabel.parse("sts_ocm_role", "")
        if label.is_empty and label.serialize() == "":
            results.test_pass("Empty label has no ARNs")
        else:
            results.test_fail("Empty label has no ARNs", str(label))

        label = LinkedRoleLabel.parse("sts_ocm_role", "arn:a,arn:b")
        if label.role_arns == ["arn:a", "arn:b"] and label.serialize() == "arn:a,arn:b":
            results.test_pass("Label parse and serialize")
        else:
            results.test_fail("Label parse and serialize", str(label))

    except Exception as e:
        results.test_fail("ARN utils tests", str(e))

    results.assert_passed()


def test_validators():
    """Test the validators library."""
    results = TestResults()

    try:
        field = validators.compose([validators.required, validators.max_length(3)])
        error = results.expect_raises("Composed: first failure wins", ValidationError, field, "")
        if error is not None and str(error) == "Value is required":
            results.test_pass("Composed: required runs first")
        else:
            results.test_fail("Composed: required runs first", str(error))
        results.expect_raises("Composed: max length", ValidationError, field, "abcd")
        field("abc")
        results.test_pass("Composed: valid value")

        validators.is_url("https://example.com/path")
        validators.is_url("")
        validators.is_url_https("https://example.com")
        results.test_pass("Valid URLs accepted")
        results.expect_raises("URL with spaces", ValidationError, validators.is_url, "not a url")
        results.expect_raises("URL without scheme", ValidationError, validators.is_url, "example.com")
        results.expect_raises("HTTPS required", ValidationError, validators.is_url_https, "http://example.com")

        validators.is_cidr("10.0.0.0/16")
        results.test_pass("Valid CIDR")
        results.expect_raises("CIDR without prefix", ValidationError, validators.is_cidr, "10.0.0.0")
        results.expect_raises("CIDR prefix too long", ValidationError, validators.is_cidr, "10.0.0.0/33")

        validators.reg_exp(r"^[a-z]+$")("abc")
        validators.reg_exp_boolean(r"^true$")(True)
        results.test_pass("Regex validators accept matches")
        results.expect_raises("Regex mismatch", ValidationError, validators.reg_exp(r"^[a-z]+$"), "ABC")
        results.expect_raises("Boolean regex mismatch", ValidationError, validators.reg_exp_boolean(r"^true$"), False)

        validators.subnets_count_validator(False, False, False)(["subnet-1", "subnet-2"])
        validators.availability_zones_count_validator(True)(["a", "b", "c"])
        results.test_pass("Selection validators accept valid selections")
        results.expect_raises("Subnet selection count", SubnetCountMismatchError,
                              validators.subnets_count_validator(True, False, False), ["subnet-1", "subnet-2"])

        validators.cluster_name_validator("my-cluster")
        validators.cluster_name_validator("a" * 15)
        results.test_pass("Valid cluster names")
        results.expect_raises("Uppercase cluster name", ValidationError, validators.cluster_name_validator, "My_Cluster")
        results.expect_raises("Long cluster name", ValidationError, validators.cluster_name_validator, "a" * 16)

        validators.validate_http_proxy("http://proxy.example.com:8080")
        results.test_pass("HTTP proxy accepted")
        results.expect_raises("HTTPS proxy rejected", ValidationError,
                              validators.validate_http_proxy, "https://proxy.example.com")

        validators.validate_http_tokens_value("required")
        validators.validate_http_tokens_value("optional")
        results.test_pass("HTTP tokens values")
        results.expect_raises("Bad HTTP tokens value", ValidationError, validators.validate_http_tokens_value, "always")

        validators.validate_balancing_ignored_labels("topology.kubernetes.io/zone,foo")
        results.test_pass("Balancing ignored labels")
        results.expect_raises("Label too long", ValidationError,
                              validators.validate_balancing_ignored_labels, "a" * 64)
        results.expect_raises("Label bad start", ValidationError,
                              validators.validate_balancing_ignored_labels, "-bad")

        validators.machine_pool_root_disk_size_validator("300GiB")
        error = results.expect_raises("Disk size validator", ValidationError,
                                      validators.machine_pool_root_disk_size_validator, "100")
        if error is not None and "failed to parse machine pool root disk size" in str(error):
            results.test_pass("Disk size validator message")
        else:
            results.test_fail("Disk size validator message", str(error))

        if validators.is_valid_cluster_key("my_cluster-1") and not validators.is_valid_cluster_key("bad key"):
            results.test_pass("Cluster key predicate")
        else:
            results.test_fail("Cluster key predicate", "")

        bad_names = ["~", ".", "..", "a:b", "a/b", "a%b"]
        if validators.is_valid_username("alice") and not any(validators.is_valid_username(n) for n in bad_names):
            results.test_pass("Username predicate")
        else:
            results.test_fail("Username predicate", "")

        with tempfile.TemporaryDirectory() as temp_dir:
            cert_path = os.path.join(temp_dir, "ca.pem")
            with open(cert_path, 'wb') as f:
                f.write(make_certificate_pem())

            validators.is_cert(cert_path)
            validators.is_cert('""')
            validators.validate_additional_trust_bundle(cert_path)
            results.test_pass("Certificate file accepted")

            text_path = os.path.join(temp_dir, "ca.txt")
            with open(text_path, 'w') as f:
                f.write("not a certificate")
            results.expect_raises("Certificate extension", ValidationError, validators.is_cert, text_path)
            results.expect_raises("Missing certificate file", ValidationError,
                                  validators.is_cert, os.path.join(temp_dir, "missing.pem"))
            results.expect_raises("Trust bundle without certificates", ValidationError,
                                  validators.validate_additional_trust_bundle, text_path)

    except Exception as e:
        results.test_fail("Validators tests", str(e))

    results.assert_passed()


def main():
    """Run all validation utility tests."""
    print("🧪 TESTING VALIDATION UTILITIES")
    print("=" * 60)

    test_suites = [
        ("Version Parser", test_version_parser),
        ("Version Comparison", test_version_comparison),
        ("OpenShift Version Utils", test_openshift_version_utils),
        ("Disk Size Parser", test_disk_size_parser),
        ("Subnet Topology", test_subnet_topology),
        ("Subnet Classification", test_subnet_classification),
        ("ARN Utils", test_arn_utils),
        ("Validators", test_validators)
    ]

    failed_suites = []
    for suite_name, test_func in test_suites:
        print(f"\n📋 {suite_name}:")
        try:
            test_func()
        except AssertionError:
            failed_suites.append(suite_name)

    print(f"\n{'='*60}")
    print(f"SUITE SUMMARY: {len(test_suites) - len(failed_suites)}/{len(test_suites)} passed")
    print(f"{'='*60}")

    if not failed_suites:
        print("🎉 All validation utility tests passed!")
        return 0
    print(f"💥 Failed suites: {', '.join(failed_suites)}")
    return 1


if __name__ == "__main__":
    sys.exit(main())

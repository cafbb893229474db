"""ASG Instances By Age - Root Package.

Lists the members of AWS Auto Scaling groups ordered by launch time and picks
the oldest (or newest) of them, by count or by percentage. Typical users are
rolling-restart scripts that recycle a slice of a fleet at a time.

Key Components:
    - domain: Instance records, age ranking and selection policies
    - application: The fetch / enrich / rank / select pipeline
    - infrastructure: boto3 adapter for the Auto Scaling and EC2 APIs
    - config: Configuration schemas and loading
    - cli: Command line interface and report formatting

Usage:
    asg-instances-by-age -n web,worker -p 0.25 -l
"""

from ._version import __version__

__package_name__ = "asg-instances-by-age"

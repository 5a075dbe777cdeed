from .main import cryptpipe, cli, main
from .api_streams import *
from .api_transforms import *
from .version import __version__

CancellationToken = cryptpipe.CancellationToken
OperationCancelled = cryptpipe.OperationCancelled
OwnedStream = cryptpipe.OwnedStream
TransformWriter = cryptpipe.TransformWriter
TextEncoding = cryptpipe.TextEncoding
PipelineJob = cryptpipe.PipelineJob

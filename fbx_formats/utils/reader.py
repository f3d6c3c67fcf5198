import os
import io
import struct
from fbx_formats.error import InvalidFormatError


class BinaryReader(object):

	def __init__(self, stream):
		if isinstance(stream, (bytes, bytearray)):
			self.stream = io.BytesIO(stream)
		else:
			self.stream = stream

	def seek(self, offset, whence=os.SEEK_SET):
		return self.stream.seek(offset, whence)

	def tell(self):
		return self.stream.tell()

	def unpack(self, fmt, length=1):
		return struct.unpack(fmt, self.read_bytes(length))[0]

	def read_bytes(self, length):
		value = self.stream.read(length)
		if len(value) < length:
			raise InvalidFormatError(F"Reading past the end at offset {self.tell()}")
		return value

	def read_string(self, length, encoding='utf-8'):
		return self.read_bytes(length).decode(encoding, errors='replace')

	def read_array(self, code, count, endian='<'):
		data = self.read_bytes(count * struct.calcsize(code))
		return list(struct.unpack(f'{endian}{count}{code}', data))

	def read_bool(self):
		return self.unpack('?')

	def read_float(self, endian='<'):
		return self.unpack(f'{endian}f', 4)

	def read_double(self, endian='<'):
		return self.unpack(f'{endian}d', 8)

	def read_uint8(self, endian='<'):
		return self.unpack(f'{endian}B')

	def read_int16(self, endian='<'):
		return self.unpack(f'{endian}h', 2)

	def read_int32(self, endian='<'):
		return self.unpack(f'{endian}i', 4)

	def read_uint32(self, endian='<'):
		return self.unpack(f'{endian}I', 4)

	def read_int64(self, endian='<'):
		return self.unpack(f'{endian}q', 8)

	def read_uint64(self, endian='<'):
		return self.unpack(f'{endian}Q', 8)

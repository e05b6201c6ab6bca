"""SPIR-V enumerations needed to label a disassembly listing."""

from __future__ import annotations

from typing import Mapping

MAGIC_NUMBER = 0x07230203
HEADER_WORDS = 5

OP_SOURCE = 3
OP_NAME = 5
OP_EXT_INST_IMPORT = 11
OP_MEMORY_MODEL = 14
OP_ENTRY_POINT = 15
OP_FUNCTION = 54
OP_FUNCTION_END = 56

UNRECOGNISED = "Unrecognised"

OPCODE_NAMES: Mapping[int, str] = {
    0: "Nop", 1: "Undef", 2: "SourceContinued", 3: "Source", 4: "SourceExtension",
    5: "Name", 6: "MemberName", 7: "String", 8: "Line", 10: "Extension",
    11: "ExtInstImport", 12: "ExtInst", 14: "MemoryModel", 15: "EntryPoint",
    16: "ExecutionMode", 17: "Capability",
    19: "TypeVoid", 20: "TypeBool", 21: "TypeInt", 22: "TypeFloat", 23: "TypeVector",
    24: "TypeMatrix", 25: "TypeImage", 26: "TypeSampler", 27: "TypeSampledImage",
    28: "TypeArray", 29: "TypeRuntimeArray", 30: "TypeStruct", 31: "TypeOpaque",
    32: "TypePointer", 33: "TypeFunction", 34: "TypeEvent", 35: "TypeDeviceEvent",
    36: "TypeReserveId", 37: "TypeQueue", 38: "TypePipe", 39: "TypeForwardPointer",
    41: "ConstantTrue", 42: "ConstantFalse", 43: "Constant", 44: "ConstantComposite",
    45: "ConstantSampler", 46: "ConstantNull", 48: "SpecConstantTrue",
    49: "SpecConstantFalse", 50: "SpecConstant", 51: "SpecConstantComposite",
    52: "SpecConstantOp",
    54: "Function", 55: "FunctionParameter", 56: "FunctionEnd", 57: "FunctionCall",
    59: "Variable", 60: "ImageTexelPointer", 61: "Load", 62: "Store", 63: "CopyMemory",
    64: "CopyMemorySized", 65: "AccessChain", 66: "InBoundsAccessChain",
    67: "PtrAccessChain", 68: "ArrayLength", 69: "GenericPtrMemSemantics",
    70: "InBoundsPtrAccessChain",
    71: "Decorate", 72: "MemberDecorate", 73: "DecorationGroup", 74: "GroupDecorate",
    75: "GroupMemberDecorate",
    77: "VectorExtractDynamic", 78: "VectorInsertDynamic", 79: "VectorShuffle",
    80: "CompositeConstruct", 81: "CompositeExtract", 82: "CompositeInsert",
    83: "CopyObject", 84: "Transpose",
    86: "SampledImage", 87: "ImageSampleImplicitLod", 88: "ImageSampleExplicitLod",
    89: "ImageSampleDrefImplicitLod", 90: "ImageSampleDrefExplicitLod",
    91: "ImageSampleProjImplicitLod", 92: "ImageSampleProjExplicitLod",
    93: "ImageSampleProjDrefImplicitLod", 94: "ImageSampleProjDrefExplicitLod",
    95: "ImageFetch", 96: "ImageGather", 97: "ImageDrefGather", 98: "ImageRead",
    99: "ImageWrite", 100: "Image", 101: "ImageQueryFormat", 102: "ImageQueryOrder",
    103: "ImageQuerySizeLod", 104: "ImageQuerySize", 105: "ImageQueryLod",
    106: "ImageQueryLevels", 107: "ImageQuerySamples",
    109: "ConvertFToU", 110: "ConvertFToS", 111: "ConvertSToF", 112: "ConvertUToF",
    113: "UConvert", 114: "SConvert", 115: "FConvert", 116: "QuantizeToF16",
    117: "ConvertPtrToU", 118: "SatConvertSToU", 119: "SatConvertUToS",
    120: "ConvertUToPtr", 121: "PtrCastToGeneric", 122: "GenericCastToPtr",
    123: "GenericCastToPtrExplicit", 124: "Bitcast",
    126: "SNegate", 127: "FNegate", 128: "IAdd", 129: "FAdd", 130: "ISub", 131: "FSub",
    132: "IMul", 133: "FMul", 134: "UDiv", 135: "SDiv", 136: "FDiv", 137: "UMod",
    138: "SRem", 139: "SMod", 140: "FRem", 141: "FMod", 142: "VectorTimesScalar",
    143: "MatrixTimesScalar", 144: "VectorTimesMatrix", 145: "MatrixTimesVector",
    146: "MatrixTimesMatrix", 147: "OuterProduct", 148: "Dot", 149: "IAddCarry",
    150: "ISubBorrow", 151: "UMulExtended", 152: "SMulExtended",
    154: "Any", 155: "All", 156: "IsNan", 157: "IsInf", 158: "IsFinite",
    159: "IsNormal", 160: "SignBitSet", 161: "LessOrGreater", 162: "Ordered",
    163: "Unordered", 164: "LogicalEqual", 165: "LogicalNotEqual", 166: "LogicalOr",
    167: "LogicalAnd", 168: "LogicalNot", 169: "Select",
    170: "IEqual", 171: "INotEqual", 172: "UGreaterThan", 173: "SGreaterThan",
    174: "UGreaterThanEqual", 175: "SGreaterThanEqual", 176: "ULessThan",
    177: "SLessThan", 178: "ULessThanEqual", 179: "SLessThanEqual",
    180: "FOrdEqual", 181: "FUnordEqual", 182: "FOrdNotEqual", 183: "FUnordNotEqual",
    184: "FOrdLessThan", 185: "FUnordLessThan", 186: "FOrdGreaterThan",
    187: "FUnordGreaterThan", 188: "FOrdLessThanEqual", 189: "FUnordLessThanEqual",
    190: "FOrdGreaterThanEqual", 191: "FUnordGreaterThanEqual",
    194: "ShiftRightLogical", 195: "ShiftRightArithmetic", 196: "ShiftLeftLogical",
    197: "BitwiseOr", 198: "BitwiseXor", 199: "BitwiseAnd", 200: "Not",
    201: "BitFieldInsert", 202: "BitFieldSExtract", 203: "BitFieldUExtract",
    204: "BitReverse", 205: "BitCount",
    207: "DPdx", 208: "DPdy", 209: "Fwidth", 210: "DPdxFine", 211: "DPdyFine",
    212: "FwidthFine", 213: "DPdxCoarse", 214: "DPdyCoarse", 215: "FwidthCoarse",
    218: "EmitVertex", 219: "EndPrimitive", 220: "EmitStreamVertex",
    221: "EndStreamPrimitive", 224: "ControlBarrier", 225: "MemoryBarrier",
    227: "AtomicLoad", 228: "AtomicStore", 229: "AtomicExchange",
    230: "AtomicCompareExchange", 231: "AtomicCompareExchangeWeak",
    232: "AtomicIIncrement", 233: "AtomicIDecrement", 234: "AtomicIAdd",
    235: "AtomicISub", 236: "AtomicSMin", 237: "AtomicUMin", 238: "AtomicSMax",
    239: "AtomicUMax", 240: "AtomicAnd", 241: "AtomicOr", 242: "AtomicXor",
    245: "Phi", 246: "LoopMerge", 247: "SelectionMerge", 248: "Label", 249: "Branch",
    250: "BranchConditional", 251: "Switch", 252: "Kill", 253: "Return",
    254: "ReturnValue", 255: "Unreachable", 256: "LifetimeStart", 257: "LifetimeStop",
    259: "GroupAsyncCopy", 260: "GroupWaitEvents", 261: "GroupAll", 262: "GroupAny",
    263: "GroupBroadcast", 264: "GroupIAdd", 265: "GroupFAdd", 266: "GroupFMin",
    267: "GroupUMin", 268: "GroupSMin", 269: "GroupFMax", 270: "GroupUMax",
    271: "GroupSMax",
    274: "ReadPipe", 275: "WritePipe", 276: "ReservedReadPipe", 277: "ReservedWritePipe",
    278: "ReserveReadPipePackets", 279: "ReserveWritePipePackets",
    280: "CommitReadPipe", 281: "CommitWritePipe", 282: "IsValidReserveId",
    283: "GetNumPipePackets", 284: "GetMaxPipePackets",
    285: "GroupReserveReadPipePackets", 286: "GroupReserveWritePipePackets",
    287: "GroupCommitReadPipe", 288: "GroupCommitWritePipe",
    291: "EnqueueMarker", 292: "EnqueueKernel", 293: "GetKernelNDrangeSubGroupCount",
    294: "GetKernelNDrangeMaxSubGroupSize", 295: "GetKernelWorkGroupSize",
    296: "GetKernelPreferredWorkGroupSizeMultiple", 297: "RetainEvent",
    298: "ReleaseEvent", 299: "CreateUserEvent", 300: "IsValidEvent",
    301: "SetUserEventStatus", 302: "CaptureEventProfilingInfo",
    303: "GetDefaultQueue", 304: "BuildNDRange",
    317: "NoLine", 330: "ModuleProcessed", 331: "ExecutionModeId",
}

SOURCE_LANGUAGES: Mapping[int, str] = {
    0: "Unknown",
    1: "ESSL",
    2: "GLSL",
    3: "OpenCL C",
    4: "OpenCL C++",
    5: "HLSL",
}

ADDRESSING_MODELS: Mapping[int, str] = {
    0: "Logical",
    1: "Physical (32-bit)",
    2: "Physical (64-bit)",
}

MEMORY_MODELS: Mapping[int, str] = {
    0: "Simple",
    1: "GLSL450",
    2: "OpenCL",
    3: "Vulkan",
}

EXECUTION_MODELS: Mapping[int, str] = {
    0: "Vertex Shader",
    1: "Tess. Control Shader",
    2: "Tess. Eval Shader",
    3: "Geometry Shader",
    4: "Fragment Shader",
    5: "Compute Shader",
    6: "Kernel",
}

# keyed on the tool id in the upper 16 bits of the generator word
GENERATORS: Mapping[int, str] = {
    0: "Khronos",
    6: "LunarG",
    7: "Khronos SPIR-V Tools Assembler",
    8: "glslang",
    13: "shaderc",
}


def opcode_name(opcode: int) -> str:
    return OPCODE_NAMES.get(opcode, f"Unknown{opcode}")


def enum_name(table: Mapping[int, str], value: int) -> str:
    return table.get(value, UNRECOGNISED)


def generator_name(generator: int) -> str:
    return GENERATORS.get(generator >> 16, UNRECOGNISED)

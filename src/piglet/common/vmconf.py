WORD_BITS        = 64
WORD_MASK        = (1 << WORD_BITS) - 1         # stack cells are unsigned 64-bit

IMM_BITS         = 8
IMM_MASK         = (1 << IMM_BITS) - 1
IMM_MIN          = -(1 << (IMM_BITS - 1))       # signed immediate lower bound
IMM_MAX          = IMM_MASK                     # raw unsigned byte is accepted too

RESULT_DEFAULT   = 0                            # result register before POP_RES

MAX_CODE_LEN     = 4096                         # assembler output limit, bytes
